from __future__ import annotations


class ChartLayoutError(ValueError):
    pass


class InvalidConfigurationError(ChartLayoutError):
    pass


class ChartDataError(ChartLayoutError):
    pass
