class CRCError(Exception):
    """Base class for crsfcrc-specific errors."""


# Raised while engine classes are being defined
class BuildConfigurationError(CRCError):
    pass


class EngineClosedError(CRCError):
    pass
