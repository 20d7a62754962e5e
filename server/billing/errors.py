class BillingError(ValueError):
    pass


class ValidationError(BillingError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class PaymentError(BillingError):
    pass


class AllocationMismatchError(BillingError):
    pass


class ConfigurationError(BillingError):
    pass
