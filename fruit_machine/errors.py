class FruitMachineError(Exception):
    """Base class for fruit machine errors."""


class ConfigError(FruitMachineError):
    """Raised when machine configuration is missing, malformed or invalid."""


class EmptyAlphabetError(ConfigError):
    """Raised when a symbol draw is requested from an empty alphabet."""


class InvalidAmountError(FruitMachineError, ValueError):
    """Raised when a payout amount is negative."""


class SymbolSourceExhausted(FruitMachineError):
    """Raised when a scripted symbol source has no symbols left to replay."""
