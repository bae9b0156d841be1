from enum import IntEnum


class FormFactor(IntEnum):
    """
    The labels for the Brother QL series are supplied either as die-cut (pre-sized), or for more flexibility the continuous label tapes offer the ability to vary the label length.
    """

    #: endless (continuous) labels
    CONTINUOUS = 1
    #: rectangular die-cut labels
    DIE_CUT = 2
    #: round die-cut labels
    ROUND_DIE_CUT = 3

    @property
    def media_type(self) -> int:
        """Media type code used in the status frame and in the ESC i z command."""
        if self == FormFactor.CONTINUOUS:
            return 0x0A
        return 0x0B

    @property
    def is_die_cut(self) -> bool:
        return self != FormFactor.CONTINUOUS
