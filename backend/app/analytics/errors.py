# backend/app/analytics/errors.py


class UnsupportedPeriodError(ValueError):
    def __init__(self, period: str):
        super().__init__(f"unsupported time period: {period!r}")
        self.period = period


class UnknownMetricError(ValueError):
    def __init__(self, metric_name: str):
        super().__init__(f"unknown metric name: {metric_name!r}")
        self.metric_name = metric_name


class NonNumericMetricError(TypeError):
    """A fact's value was used as a number but holds something else."""

    def __init__(self, metric_name: str, value):
        super().__init__(f"non-numeric value for {metric_name}: {value!r}")
        self.metric_name = metric_name
        self.value = value


def as_number(metric_name: str, value) -> float:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise NonNumericMetricError(metric_name, value)
    return float(value)
