"""Exception hierarchy for the expense tooling.

Local validation problems are raised as these exceptions; the extraction
invoker converts remote failures into result values instead (see
``src.clients.expenses.extraction``).
"""


class ViaticosError(Exception):
    """Base exception for all expense tooling errors.

    All project-specific exceptions should inherit from this class.
    """
    pass


class ProviderNotFoundError(ViaticosError):
    """Raised when an LLM provider is not registered.

    Attributes:
        provider: Name of the provider that was not found
        available: List of available provider names
    """
    def __init__(self, provider: str, available: list[str] | None = None):
        self.provider = provider
        self.available = available or []
        message = f"Provider '{provider}' not found"
        if self.available:
            message += f". Available providers: {', '.join(self.available)}"
        super().__init__(message)


class ConfigurationError(ViaticosError):
    """Raised when configuration is invalid or missing required settings.

    Attributes:
        setting: Name of the setting that is invalid/missing
        message: Detailed error message
    """
    def __init__(self, setting: str, message: str | None = None):
        self.setting = setting
        self.message = message or f"Invalid or missing configuration for '{setting}'"
        super().__init__(self.message)


class APIKeyError(ConfigurationError):
    """Raised when a required API key is missing.

    Attributes:
        provider: Provider name requiring the API key
        env_var: Environment variable name for the API key
    """
    def __init__(self, provider: str, env_var: str):
        self.provider = provider
        self.env_var = env_var
        message = f"{env_var} is required for {provider}. Set {env_var}."
        super().__init__(env_var, message)


class UnsupportedFileTypeError(ViaticosError):
    """Raised when a receipt's MIME type has no extraction request shape."""

    def __init__(self, file_name: str, mime_type: str):
        self.file_name = file_name
        self.mime_type = mime_type
        super().__init__(f"Unsupported file type '{mime_type or 'unknown'}' for {file_name}")


class NoFilesSelectedError(ViaticosError):
    """Raised when a batch extraction is started without any file."""

    def __init__(self, message: str = "Please select at least one receipt file."):
        super().__init__(message)


class SubmissionValidationError(ViaticosError):
    """Raised when batch submission preconditions do not hold."""
    pass


class ExpenseNotFoundError(ViaticosError):
    """Raised when no expense record has the requested id."""

    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"Expense '{expense_id}' not found")


class InvalidStatusTransitionError(ViaticosError):
    """Raised when a status change is not Pending -> Approved/Rejected.

    Attributes:
        current: Current status value (None when the target itself is invalid)
        target: Requested status value
    """
    def __init__(self, target: str, current: str | None = None):
        self.current = current
        self.target = target
        if current is None:
            message = f"Cannot set status to '{target}'; only Approved or Rejected are allowed"
        else:
            message = f"Cannot change status from '{current}' to '{target}'; only Pending expenses can be reviewed"
        super().__init__(message)
