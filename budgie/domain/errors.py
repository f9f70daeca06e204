"""
Domain errors

Validation errors also subclass ValueError so callers that only know about
bad input can catch them without importing this module.
"""


class BudgetError(Exception):
    """Base class for all budgeting errors"""
    pass


class InvalidCadence(BudgetError, ValueError):
    """Cadence is not one of WEEKLY, MONTHLY, YEARLY"""

    def __init__(self, cadence):
        self.cadence = cadence
        super().__init__(f"Unknown target cadence: {cadence!r}. Use WEEKLY, MONTHLY or YEARLY")


class InvalidPriority(BudgetError, ValueError):
    """Target priority must be a positive integer"""

    def __init__(self, priority):
        self.priority = priority
        super().__init__(f"Target priority must be a positive integer, got {priority!r}")


class EmptyTransaction(BudgetError, ValueError):
    """Transaction has no itemized amounts"""

    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f"Transaction on {account_name!r} has no itemized amounts")


class InvalidAmount(BudgetError, ValueError):
    """Amount is not an integer number of cents"""

    def __init__(self, account_name: str, amount):
        self.account_name = account_name
        self.amount = amount
        super().__init__(f"Invalid amount for {account_name!r}: {amount!r} (integer cents expected)")


class EmptyScheduleDefinition(BudgetError, ValueError):
    """Saving schedule requested for a target without any value history"""

    def __init__(self, target_name: str):
        self.target_name = target_name
        super().__init__(f"Target {target_name!r} has no value history to anchor a schedule on")


class DuplicateAccount(BudgetError, ValueError):
    """Account with this name already exists"""

    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f"Account already exists: {account_name!r}")


class UnknownAccount(BudgetError):
    """Event or query references an account that was never created"""

    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f"Unknown account: {account_name!r}")


class UnknownTarget(BudgetError):
    """Command references a target that was never created"""

    def __init__(self, target_name: str):
        self.target_name = target_name
        super().__init__(f"Unknown target: {target_name!r}")


class UnknownEventType(BudgetError):
    """Stored record has a type/version this build cannot decode"""

    def __init__(self, event_type, version=None):
        self.event_type = event_type
        self.version = version
        super().__init__(f"Cannot decode event {event_type!r} (version {version!r})")


class MigrationLoopError(BudgetError):
    """Event migrations revisit a (type, version) pair or never settle"""
    pass


class StoreUnavailable(BudgetError):
    """Event store backend failed to read or append"""
    pass
