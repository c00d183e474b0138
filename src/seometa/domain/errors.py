class SeoMetaError(Exception):
    """Base error for the metadata validator."""


class MetadataShapeError(SeoMetaError, TypeError):
    """A record field has the wrong primitive type, or the key is unknown."""


class RecordLoadError(SeoMetaError):
    pass


class ConfigError(SeoMetaError):
    pass
