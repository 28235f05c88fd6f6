# Utils package
from .probes import Probe, ProbeMatch, first_match
from .popup_dismisser import dismiss_cookie_consent
from .handoff import HumanHandoff, HandoffPoint

__all__ = [
    'Probe',
    'ProbeMatch',
    'first_match',
    'dismiss_cookie_consent',
    'HumanHandoff',
    'HandoffPoint',
]
