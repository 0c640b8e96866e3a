from .auth import API_VERSION, Authenticator, SharedKeyCredentials, format_date
from .blob import BlobManager, iter_blob_names
from .errors import (
    BlobManagerError,
    DestinationWriteError,
    ConfigurationMissing,
    KeyDecodeError,
    PayloadReadError,
    RemoteRejection,
    ResponseParseError,
    SigningError,
    TransportError,
)
from .operations import DownloadBlob, ListBlobs, Operation, UploadBlob
from .transport import RequestsTransport, TransportResponse
from .utils import SharedKeySigner
