"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class LimitExceededError(DomainException):
    """Authorization or drawdown would exceed a governance or credit limit"""

    pass


class UnauthorizedError(DomainException):
    """Caller lacks the role required for the operation"""

    pass


class NotFoundError(DomainException):
    """Referenced credit line or underwriter does not exist"""

    pass


class InvalidAmountError(DomainException):
    """Amount is negative, zero where a positive value is required, or not an integer"""

    pass


class InvalidCreditTermsError(DomainException):
    """Credit line terms cannot produce a payment schedule"""

    pass


class ArithmeticOverflowError(DomainException):
    """Fixed-point result exceeds the representable range"""

    pass


class DivideByZeroError(DomainException):
    """Fixed-point division by zero"""

    pass


class PoolError(DomainException):
    """Base exception for failures raised by the pool custody collaborator"""

    pass


class InsufficientPoolFundsError(PoolError):
    """Pool cannot cover the requested transfer"""

    pass


class PoolAccessError(PoolError):
    """Custody capability was rejected by the pool"""

    pass


class PoolUnavailableError(PoolError):
    """Pool is not configured, timed out, or returned an unexpected response"""

    pass
