"""
Custom exceptions for the TickTee Style storefront
"""


class StoreException(Exception):
    """Base exception for all storefront errors"""
    status_code = 500

    def __init__(self, message: str, code: str = "STORE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationException(StoreException):
    """Exception raised for invalid input"""
    status_code = 400

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(
            message=message,
            code="VALIDATION_ERROR"
        )


class NotFoundException(StoreException):
    """Exception raised when a record does not exist (or is not visible to the caller)"""
    status_code = 404

    def __init__(self, resource: str, identifier=None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND"
        )


class OutOfStockException(StoreException):
    """Exception raised when a product cannot cover the requested quantity"""
    status_code = 400

    def __init__(self, product_name: str, available: int):
        self.product_name = product_name
        self.available = available
        super().__init__(
            message=f"Insufficient stock for {product_name}. Available: {available}",
            code="OUT_OF_STOCK"
        )


class InvalidTransitionException(StoreException):
    """Exception raised when an order status change is not allowed"""
    status_code = 400

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            message=f"Cannot change order status from '{current}' to '{target}'",
            code="INVALID_TRANSITION"
        )


class InvalidRoleException(StoreException):
    """Exception raised for a role value outside the closed role set"""
    status_code = 400

    def __init__(self, value):
        self.value = value
        super().__init__(
            message=f"Unrecognized role: {value!r}",
            code="INVALID_ROLE"
        )


class ImmutableRecordException(StoreException):
    """Exception raised when code tries to rewrite a snapshot record"""

    def __init__(self, model_name: str):
        super().__init__(
            message=f"{model_name} records cannot be modified after creation",
            code="IMMUTABLE_RECORD"
        )


class UploadException(StoreException):
    """Exception raised when an uploaded file is rejected"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="UPLOAD_ERROR"
        )
