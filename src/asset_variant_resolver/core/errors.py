"""Exception hierarchy for manifest parsing, store access and resolution."""


class ManifestParseError(ValueError):
    """Base class for manifest decode failures."""


class EmptyManifestError(ManifestParseError):
    """The binary manifest decoded to no value at all."""


class MalformedVariantError(ManifestParseError):
    """A binary manifest variant entry is missing a field or has a wrong type."""


class MalformedJsonError(ManifestParseError):
    """The legacy manifest is not valid JSON or has the wrong shape."""


class MalformedBinaryError(ManifestParseError):
    """The binary manifest is corrupt or its top-level value is not a mapping."""


class StoreLoadError(LookupError):
    """An asset store could not produce the bytes for a name.

    Attributes:
        name: The name that was requested from the store
    """

    def __init__(self, name: str, reason: str = "not found"):
        super().__init__(f"Unable to load asset '{name}': {reason}")
        self.name = name
        self.reason = reason


class AssetResolutionError(RuntimeError):
    """Every manifest acquisition step failed for an asset key.

    Attributes:
        key: The logical asset key being resolved
        attempted: Manifest names that were tried, in order
        errors: The underlying exception for each attempt
    """

    def __init__(self, key: str, attempted: list[str], errors: list[BaseException]):
        details = "; ".join(
            f"{name}: {type(error).__name__}: {error}" for name, error in zip(attempted, errors)
        )
        super().__init__(f"Unable to resolve asset '{key}' (tried {', '.join(attempted)}). {details}")
        self.key = key
        self.attempted = list(attempted)
        self.errors = list(errors)
