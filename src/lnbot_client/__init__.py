import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lnbot-client")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .client import AsyncLnBot, LnBot
from .errors import (
    ApiError,
    BadRequestError,
    ConflictError,
    DecodeError,
    ForbiddenError,
    LnBotError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
    classify,
)
from .pagination import ListParams
from .sse import ServerSentEvent, SSEDecoder
from .types import (
    AddressInvoiceResponse,
    AddressResponse,
    ApiKeyResponse,
    BackupPasskeyBeginResponse,
    CreateWalletResponse,
    CreateWebhookResponse,
    InvoiceEvent,
    InvoiceEventType,
    InvoiceResponse,
    InvoiceStatus,
    L402ChallengeResponse,
    L402PayResponse,
    PaymentEvent,
    PaymentEventType,
    PaymentResponse,
    PaymentStatus,
    RecoveryBackupResponse,
    RecoveryRestoreResponse,
    RestorePasskeyBeginResponse,
    RestorePasskeyCompleteResponse,
    RotateApiKeyResponse,
    TransactionResponse,
    TransactionType,
    TransferAddressResponse,
    UnknownEventType,
    VerifyL402Response,
    WalletEvent,
    WalletEventType,
    WalletResponse,
    WebhookResponse,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "LnBot",
    "AsyncLnBot",
    "ListParams",
    "LnBotError",
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "TransportError",
    "DecodeError",
    "classify",
    "ServerSentEvent",
    "SSEDecoder",
    "WalletResponse",
    "CreateWalletResponse",
    "ApiKeyResponse",
    "RotateApiKeyResponse",
    "InvoiceResponse",
    "InvoiceStatus",
    "InvoiceEvent",
    "InvoiceEventType",
    "AddressInvoiceResponse",
    "PaymentResponse",
    "PaymentStatus",
    "PaymentEvent",
    "PaymentEventType",
    "AddressResponse",
    "TransferAddressResponse",
    "TransactionResponse",
    "TransactionType",
    "CreateWebhookResponse",
    "WebhookResponse",
    "WalletEvent",
    "WalletEventType",
    "UnknownEventType",
    "RecoveryBackupResponse",
    "RecoveryRestoreResponse",
    "BackupPasskeyBeginResponse",
    "RestorePasskeyBeginResponse",
    "RestorePasskeyCompleteResponse",
    "L402ChallengeResponse",
    "VerifyL402Response",
    "L402PayResponse",
]
