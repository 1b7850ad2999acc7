class SupabaseError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(Exception):
    def __init__(self, resource: str, resource_id: int | str):
        self.resource = resource
        self.resource_id = resource_id
        self.message = f"{resource} {resource_id} not found"
        super().__init__(self.message)


class BookingConflictError(Exception):
    def __init__(self, message: str, car_id: int | None = None):
        self.message = message
        self.car_id = car_id
        super().__init__(message)


class InvalidTransitionError(Exception):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        self.message = f"Cannot move booking from {current} to {target}"
        super().__init__(self.message)


class RateLimitError(Exception):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Rate limit exceeded for {service}")
