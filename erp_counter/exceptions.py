"""Error types raised by the counter engine."""


class CounterError(Exception):
    """Base error for all counter operations."""
    pass


class CounterDefinitionNotFoundError(CounterError, LookupError):
    """No counter definition exists for the requested sequence code."""

    def __init__(self, sequence_code: str):
        self.sequence_code = sequence_code
        super().__init__(f"Counter definition '{sequence_code}' not found")


class CounterOverflowError(CounterError, OverflowError):
    """The next value does not fit in the sequence number field."""

    def __init__(self, sequence_code: str, value: int, max_digits: int):
        self.sequence_code = sequence_code
        self.value = value
        self.max_digits = max_digits
        super().__init__(
            f"Next value ({value}) for counter '{sequence_code}' exceeds "
            f"the maximum length of {max_digits} digits"
        )


class CounterTransactionTimeoutError(CounterError, TimeoutError):
    """The counter transaction ran past its time budget and was rolled back."""

    def __init__(self, elapsed_ms: float, timeout_ms: int):
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Counter transaction took {elapsed_ms:.0f} ms, "
            f"exceeding the {timeout_ms} ms limit"
        )


class CounterTemplateError(CounterError, ValueError):
    """A counter definition cannot be rendered."""
    pass


class UnsupportedComponentError(CounterTemplateError):
    """The template uses a component type that has no renderer."""

    def __init__(self, sequence_code: str, component_type):
        self.sequence_code = sequence_code
        self.component_type = component_type
        name = getattr(component_type, "name", component_type)
        super().__init__(
            f"Component type {name} in counter '{sequence_code}' has no renderer"
        )


class CounterKeyError(CounterError, ValueError):
    """A site or complement is too long to key a sequence counter."""

    def __init__(self, field: str, value: str, max_length: int):
        self.field = field
        self.value = value
        self.max_length = max_length
        super().__init__(
            f"{field.capitalize()} '{value}' is longer than {max_length} characters"
        )
