class InvalidArgumentError(ValueError):
    """
    raised when a caller gives a value outside of a controlled vocabulary

    for example a region mode other than gene or exon. These are programming errors
    and are never retried
    """

    pass


class NotFoundError(KeyError):
    """
    raised when a lookup fails and the caller has asked for failure to be an error
    """

    pass
