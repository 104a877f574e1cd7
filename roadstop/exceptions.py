class RoadstopError(Exception):
    """Base class for roadstop errors."""
    pass


class ServiceConfigurationError(RoadstopError, ValueError):
    """A service could not be configured (bad base URL, invalid builder input)."""
    pass


class ServiceIOError(RoadstopError, IOError):
    """The transport failed while performing a call."""
    pass


class CallCanceledError(ServiceIOError):
    """The call was cancelled before a response could be delivered."""
    pass


class CallStateError(RoadstopError, RuntimeError):
    """A call handle was executed more than once."""
    pass
