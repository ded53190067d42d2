"""Domain layer errors."""

from enroll.domain.value import Platform, RejectionReason


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateCodeError(DomainError):
    """Raised when an invite code is already taken."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Invite code already exists: {code}")


class InvalidConfirmationTokenError(DomainError):
    """Confirmation token failed signature, type or expiry checks."""

    pass


class ProvisioningRejected(DomainError):
    """Base for failures that stop provisioning before an account exists.

    Raising one of these guarantees nothing has been consumed.
    """

    reason: RejectionReason

    def __init__(self, message: str, platform: Platform | None = None):
        self.platform = platform
        super().__init__(message)


class InvalidCodeError(ProvisioningRejected):
    """Invite is missing, exhausted or expired."""

    reason = RejectionReason.INVALID_CODE

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Invalid invite code: {code}")


class UserExistsError(ProvisioningRejected):
    """An account with the requested name already exists."""

    reason = RejectionReason.USER_EXISTS

    def __init__(self, username: str):
        super().__init__(f"User {username} already exists")


class EmailRequiredError(ProvisioningRejected):
    """An email address is required but none was supplied."""

    reason = RejectionReason.EMAIL_REQUIRED

    def __init__(self):
        super().__init__("Email address required")


class VerificationRequiredError(ProvisioningRejected):
    """A required platform verification was not supplied."""

    reason = RejectionReason.VERIFICATION_REQUIRED

    def __init__(self, platform: Platform):
        super().__init__(f"{platform.value} verification not completed", platform)


class InvalidPINError(ProvisioningRejected):
    """A supplied PIN does not resolve to a verified identity."""

    reason = RejectionReason.INVALID_PIN

    def __init__(self, platform: Platform):
        super().__init__(f"{platform.value} PIN was invalid", platform)


class ConfirmationRejectedError(ProvisioningRejected):
    """A confirmation token could not be used to resume provisioning."""

    reason = RejectionReason.INVALID_CONFIRMATION


class ConfirmationFailedError(ProvisioningRejected):
    """The confirmation gate could not issue a token."""

    reason = RejectionReason.CONFIRMATION_FAILED


class AccountCreationFailedError(ProvisioningRejected):
    """The account service refused to create the account."""

    reason = RejectionReason.ACCOUNT_CREATION_FAILED


class ExternalServiceError(DomainError):
    """A collaborator (account service, companion service, transport) failed.

    Adapters raise subclasses of this so domain code can handle failures
    without knowing which adapter produced them.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
