# eas_offchain/core/errors.py


class OffchainPackageError(ValueError):
    """Base class for every failure raised while compacting or decoding a package."""


class UnsupportedVersionError(OffchainPackageError):
    def __init__(self, version):
        self.version = version
        super().__init__(f"Unsupported version: {version}")


class MalformedPackageError(OffchainPackageError):
    """Wrong arity, wrong slot type, or a dict that is not a recognizable package."""
