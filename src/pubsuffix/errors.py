class PubSuffixError(Exception):
    pass


class InputTypeError(PubSuffixError, TypeError):
    """Raised when a host is neither a string nor an object with a host field"""


class HostFormatError(PubSuffixError, ValueError):
    """Malformed IPv6 brackets or too many unbracketed colons"""


class PortRangeError(HostFormatError):
    """Port is not a base 10 integer between 0 and 65535"""


class NoPublicSuffixError(PubSuffixError, ValueError):
    """Strict parse of a domain that does not end with a public suffix"""


class SuffixListError(PubSuffixError):
    pass


class ConfigError(PubSuffixError, ValueError):
    pass
