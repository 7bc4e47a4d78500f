from enum import IntEnum


class ReturnCode(IntEnum):
    """
    ExactSolutionLeft : f evaluated to exactly zero at the left end of the interval.
    ExactSolutionRight: f evaluated to exactly zero at the right end of the interval.
    Success           : an iterate evaluated to exactly zero.
    FloatingPointLimit: the bracket collapsed onto two adjacent floats.
    MaxIters          : the iteration cap was reached first.
    """
    ExactSolutionLeft = 0
    ExactSolutionRight = 1
    Success = 2
    FloatingPointLimit = 3
    MaxIters = 4

    @property
    def successful(self) -> bool:
        return self is not ReturnCode.MaxIters

    @classmethod
    def from_value(cls, value: "ReturnCode | str | int") -> "ReturnCode":
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(
                    f"Invalid return code int '{value}'. "
                    f"Valid numeric values: {[m.value for m in cls]}"
                )
        if isinstance(value, str):
            lookup = {name.lower(): member for name, member in cls.__members__.items()}
            try:
                return lookup[value.lower()]
            except KeyError:
                raise ValueError(
                    f"Unrecognized return code string '{value}'. "
                    f"Accepted strings: {list(cls.__members__.keys())}"
                )
        raise TypeError(
            f"Expected ReturnCode, int, or str, got {type(value).__name__}"
        )
