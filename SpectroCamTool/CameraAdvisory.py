import logging
from typing import List

logger = logging.getLogger(__name__)


def camera_advisories(auto_exposure: bool = False,
                      auto_white_balance: bool = False,
                      auto_gain: bool = False) -> List[str]:
    """
    Warnings about camera controls that change the sensor response while
    measuring.

    A relative spectrum assumes the sensor responds the same way when the
    reference and the measurement are taken.  Automatic exposure, gain or
    white balance break that assumption and should be switched off before
    calibrating or measuring.

    Returns
    -------
    list of str
        One message per offending control; empty if none is enabled.
    """
    messages = []
    if auto_exposure:
        messages.append("Automatic exposure is enabled; disable it before "
                        "calibrating or taking a reference")
    if auto_gain:
        messages.append("Automatic gain is enabled; disable it before "
                        "calibrating or taking a reference")
    if auto_white_balance:
        messages.append("Automatic white balance is enabled; disable it before "
                        "calibrating or taking a reference")
    for message in messages:
        logger.warning(message)
    return messages
