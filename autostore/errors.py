"""
autostore exceptions
"""


class AutostoreError(Exception):
    """Base exception"""
    pass


class InvalidConditionError(AutostoreError):
    """Condition label is not in the depreciation table"""

    def __init__(self, condition):
        self.condition = condition
        super().__init__(f"invalid condition {condition!r}: depreciation not applied")


class StorageError(AutostoreError):
    """Any failure coming from the database (connectivity, constraint, statement)"""
    pass


class StoreInUseError(StorageError):
    """Store still referenced by vehicles (restrict-delete policy)"""

    def __init__(self, code: int, vehicle_count: int):
        self.code = code
        self.vehicle_count = vehicle_count
        super().__init__(f"store {code} still has {vehicle_count} vehicle(s)")
