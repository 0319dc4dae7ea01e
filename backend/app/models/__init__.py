from .google_sheet import GoogleSheet
from .compound_metrics import CompoundMetrics
from .snap_shot import SnapShot

__all__ = [
    "GoogleSheet","CompoundMetrics","SnapShot"
]
