class TimetablerError(Exception):
    """Base class for errors surfaced to callers of the engine."""


class EmptyInputError(TimetablerError):
    """Raised before scheduling when teachers, subjects or classrooms is empty."""


class InputError(TimetablerError):
    """Malformed input record (blank identifier, bad number, duplicate)."""


class ConfigError(TimetablerError):
    pass


class SlotTakenError(TimetablerError):
    pass
