"""Built-in dataset used to seed an empty store.

Each call returns fresh entity instances so callers may mutate them.
"""

from app.domain.entities import (
    Bill,
    FacilityUsageRecord,
    PackageRecord,
    TopUpRecord,
    User,
    UserRole,
)

METER_NUMBER = "18-33-7005-08-7"
CONTRACT_CAPACITY = 50
USAGE_CATEGORY = "C5"

# id, roc_year, month, usage, amount, billing_period, max_demand, power_factor,
# current_reading, last_reading, basic_fee, flow_fee, payment_adjustment, others
_BILLS = (
    ("1", 113, 7, 11810, 60180, "113年06月28日至113年07月29日", 49, 100, 48920, 48500, 11810.0, 48370.0, 0, 0),
    ("2", 113, 8, 11040, 49041, "113年07月29日至113年08月29日", 48, 100, 49200, 48920, 11810.0, 37977.6, -746.8, 0.2),
    ("3", 113, 9, 11040, 49041, "113年08月29日至113年09月26日", 48, 100, 49476, 49200, 11810.0, 37977.6, -746.8, 0.2),
    ("4", 113, 10, 12600, 52886, "113年09月27日至113年10月29日", 45, 100, 49791, 49476, 9079.9, 44611.6, -805.3, -0.2),
    ("5", 113, 11, 10120, 47107, "113年10月30日至113年11月27日", 41, 100, 50044, 49791, 8660.0, 39164.4, -717.3, -0.1),
    ("6", 113, 12, 10720, 49394, "113年11月28日至113年12月26日", 40, 100, 50312, 50044, 8660.0, 41486.4, -752.1, -0.3),
    ("7", 114, 1, 9240, 43753, "113年12月27日至114年01月22日", 40, 100, 50543, 50312, 8660.0, 35758.8, -666.2, 0.4),
    ("8", 114, 2, 12080, 54579, "114年01月23日至114年02月24日", 40, 100, 50845, 50543, 8660.0, 46749.6, -831.1, 0.5),
    ("9", 114, 3, 10440, 48327, "114年02月25日至114年03月26日", 42, 100, 51106, 50845, 8660.0, 40402.8, -735.9, 0.1),
    ("10", 114, 4, 12000, 54274, "114年03月27日至114年04月27日", 41, 100, 51406, 51106, 8660.0, 46440.0, -826.5, 0.5),
    ("11", 114, 5, 11880, 53816, "114年04月28日至114年05月26日", 44, 100, 51703, 51406, 8660.0, 45975.6, -819.5, -0.1),
    ("12", 114, 6, 12400, 60521, "114年05月27日至114年06月25日", 46, 100, 52013, 51703, 11285.0, 50158.0, -921.6, -0.4),
    ("13", 114, 7, 12080, 60180, "114年06月26日至114年07月27日", 48, 100, 52315, 52013, 11810.0, 49286.4, -916.4, 0),
    ("14", 114, 8, 14040, 68057, "114年07月28日至114年08月26日", 52, 99, 52666, 52315, 11810.0, 57283.2, -1036.3, 0.1),
    ("15", 114, 9, 12760, 63385, "114年08月27日至114年09月25日", 50, 99, 52985, 52666, 11810.0, 52060.8, -958.0, 472.2),
    ("16", 114, 10, 14720, 65621, "114年09月26日至114年10月28日", 49, 100, 53353, 52985, 9185.0, 57434.7, -999.2, 0.5),
    ("17", 114, 11, 10960, 50309, "114年10月29日至114年11月26日", 43, 100, 53627, 53353, 8660.0, 42415.2, -766.1, -0.1),
)

_USERS = (
    ("Steven", "Steven", UserRole.ADMIN, "Kai"),
    ("manager", "manager", UserRole.MANAGER, "Property Manager"),
)

# Monthly totals; the id doubles as the month label.
_TOP_UPS = (
    ("2024-10", 4630), ("2024-11", 7945), ("2024-12", 7440),
    ("2025-01", 10550), ("2025-02", 3090), ("2025-03", 3700),
    ("2025-04", 1995), ("2025-05", 5610), ("2025-06", 1245),
    ("2025-07", 2100), ("2025-08", 1780), ("2025-09", 5140),
    ("2025-10", 1780), ("2025-11", 1990),
)

# ROC 114: month, gym, game room, kitchen, AV room, K1 space
_FACILITY_USAGE = (
    (1, 101, 19, 2, 32, 0),
    (2, 120, 25, 1, 10, 0),
    (3, 165, 23, 0, 9, 0),
    (4, 149, 22, 0, 11, 0),
    (5, 175, 26, 0, 14, 0),
    (6, 174, 34, 1, 3, 0),
    (7, 279, 36, 0, 7, 0),
    (8, 275, 28, 1, 9, 0),
    (9, 263, 16, 3, 7, 0),
    (10, 286, 14, 0, 8, 0),
    (11, 292, 12, 0, 7, 0),
)

_PACKAGES = (
    (2024, 5, 27), (2024, 6, 120), (2024, 7, 167), (2024, 8, 283),
    (2024, 9, 371), (2024, 10, 462), (2024, 11, 645), (2024, 12, 661),
    (2025, 1, 704), (2025, 2, 516), (2025, 3, 618), (2025, 4, 601),
    (2025, 5, 589), (2025, 6, 664), (2025, 7, 721), (2025, 8, 669),
    (2025, 9, 692), (2025, 10, 680), (2025, 11, 815),
)


def default_bills() -> list[Bill]:
    return [
        Bill(
            id=bill_id,
            roc_year=roc_year,
            month=month,
            usage=usage,
            amount=amount,
            billing_period=period,
            contract_capacity=CONTRACT_CAPACITY,
            max_demand=max_demand,
            power_factor=power_factor,
            meter_number=METER_NUMBER,
            current_reading=current,
            last_reading=last,
            usage_category=USAGE_CATEGORY,
            basic_fee=basic,
            flow_fee=flow,
            payment_adjustment=adjustment,
            others=others,
        )
        for (
            bill_id, roc_year, month, usage, amount, period, max_demand, power_factor,
            current, last, basic, flow, adjustment, others,
        ) in _BILLS
    ]


def default_users() -> list[User]:
    return [
        User(username=username, password=password, role=role, name=name)
        for username, password, role, name in _USERS
    ]


def default_top_ups() -> list[TopUpRecord]:
    return [
        TopUpRecord(id=label, date=f"{label}-01", points=value, amount=value)
        for label, value in _TOP_UPS
    ]


def default_facility_usages() -> list[FacilityUsageRecord]:
    return [
        FacilityUsageRecord(
            id=str(month),
            year=114,
            month=month,
            gym_count=gym,
            game_room_count=game_room,
            kitchen_count=kitchen,
            av_room_count=av_room,
            k1_space_count=k1_space,
        )
        for month, gym, game_room, kitchen, av_room, k1_space in _FACILITY_USAGE
    ]


def default_packages() -> list[PackageRecord]:
    return [
        PackageRecord(id=str(index), year=year, month=month, count=count)
        for index, (year, month, count) in enumerate(_PACKAGES, start=1)
    ]
