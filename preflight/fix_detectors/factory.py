from typing import List, Optional, Sequence
import logging

from preflight.fix_detectors.base import BaseFixDetector
from preflight.fix_detectors.page_resize import PageResizeDetector
from preflight.fix_detectors.bleed_added import BleedAddedDetector
from preflight.fix_detectors.flattening import FlatteningDetector
from preflight.fix_detectors.rich_black import RichBlackDetector
from preflight.fix_detectors.fonts_outlined import FontsOutlinedDetector
from preflight.fix_detectors.color_conversion import ColorConversionDetector
from preflight.models import FixCode

logger = logging.getLogger(__name__)


class DetectorFactory:
    """Registry of fix detectors, in rule order."""
    
    # Detectors are stateless, so shared instances are safe across runs
    REGISTRY: Sequence[BaseFixDetector] = (
        PageResizeDetector(),
        BleedAddedDetector(),
        FlatteningDetector(),
        RichBlackDetector(),
        FontsOutlinedDetector(),
        ColorConversionDetector(),
    )
    
    def get_detectors(self) -> List[BaseFixDetector]:
        return list(self.REGISTRY)
    
    def get_detector(self, code: FixCode) -> Optional[BaseFixDetector]:
        """
        Get the detector for a specific fix code.
        
        Args:
            code: Fix code
            
        Returns:
            Detector instance or None if not registered
        """
        for detector in self.REGISTRY:
            if detector.code == code:
                return detector
        return None
