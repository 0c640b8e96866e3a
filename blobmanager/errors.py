class BlobManagerError(Exception):
    """Base class for every failure of a single blob operation."""


class ConfigurationMissing(BlobManagerError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing '{key}' in configuration")


class KeyDecodeError(BlobManagerError):
    pass


class SigningError(BlobManagerError):
    pass


class PayloadReadError(BlobManagerError):
    pass


class TransportError(BlobManagerError):
    pass


class RemoteRejection(BlobManagerError):
    def __init__(self, status_code: int, body: str = ''):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request rejected with status {status_code}: {body}")


class ResponseParseError(BlobManagerError):
    pass


class DestinationWriteError(BlobManagerError):
    pass
