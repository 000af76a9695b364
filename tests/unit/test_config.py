"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from phaseline.core.config import Settings


class TestPhaseWindowRatios:
    def test_default_split(self):
        assert Settings().PHASE_WINDOW_RATIOS == [0.4, 0.4, 0.2]

    @pytest.mark.parametrize("ratios", [[0.5, 0.5], [0.25, 0.25, 0.25, 0.25], [0.6, -0.1, 0.5]])
    def test_invalid_ratios_rejected(self, ratios):
        with pytest.raises(ValidationError):
            Settings(PHASE_WINDOW_RATIOS=ratios)
