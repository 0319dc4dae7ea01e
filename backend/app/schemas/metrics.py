from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional, Union
from datetime import date, datetime

GoogleSheetMetricName = Literal[
    "projects_working_in_open_count",
    "projects_count",
    "projects_gave_update_count",
    "projects_delivering_impact",
    "velocity_of_experiments",
    "pocket_network_DNA_NPS",
    "budget_spend_amount",
    "total_budget_amount",
    "voters_to_control_DAO_count",
    "no_debated_proposals_count",
    "pokt_liquidity_amount",
    "twitter_followers_count",
    "community_NPS",
    "voter_power_concentration_index",
    "no_proposals_core",
    "no_proposals_community",
]
CompoundMetricName = Literal["percentage_of_projects_self_reporting"]
MetricName = Union[GoogleSheetMetricName, CompoundMetricName]

TimePeriod = Literal[
    "this-week",
    "last-week",
    "this-month",
    "last-month",
    "last-3-months",
    "last-6-months",
    "this-quarter",
    "last-quarter",
    "this-year",
    "last-year",
]

class DateRange(BaseModel):
    start: date
    end: date

    def contains(self, d: date) -> bool:
        """Inclusive on both ends."""
        return self.start <= d <= self.end

class CycleRanges(BaseModel):
    current: DateRange
    previous: DateRange

class MetricFact(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime
    metric_name: MetricName
    # Mixed at the source: sheet cells may hold free text or nothing
    metric_value: Optional[Union[float, str]] = None

class SnapshotProposals(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime
    no_debated_proposals_count: float

class AggregatedMetric(BaseModel):
    value: float = 0.0
    previous: float = 0.0
    change: float = 0.0

class BarSeriesPoint(BaseModel):
    date: datetime
    value: float

class StackedSeriesValue(BaseModel):
    name: str
    value: float

class StackedSeriesPoint(BaseModel):
    date: str  # exact ISO date-time key the values were merged on
    values: List[StackedSeriesValue]

# -------------------- Responses --------------------

class ValueChange(BaseModel):
    value: float
    change: float

class BarValues(BaseModel):
    values: List[BarSeriesPoint] = Field(default_factory=list)

class StackedValues(BaseModel):
    values: List[StackedSeriesPoint] = Field(default_factory=list)

class CommunityCollaborationBlock(BaseModel):
    ecosystem_projects_delivering_impact: ValueChange
    pocket_network_DNA_NPS: BarValues
    community_NPS: BarValues

class CommunityCollaborationMetrics(BaseModel):
    metrics: CommunityCollaborationBlock

class AwarenessBlock(BaseModel):
    twitter_followers: BarValues

class AwarenessMetrics(BaseModel):
    metrics: AwarenessBlock

class TransparencyBlock(BaseModel):
    projects_working_in_the_open: BarValues
    percentage_of_projects_self_reporting: BarValues

class TransparencyMetrics(BaseModel):
    metrics: TransparencyBlock

class AdaptabilityBlock(BaseModel):
    velocity_of_experiments_v_no_debated_proposals: StackedValues

class AdaptabilityMetrics(BaseModel):
    metrics: AdaptabilityBlock
