"""
Chart Models

Plain values describing the "Spending by Day" stacked bar chart. They
carry sizes, labels and colours; drawing them is left to the UI.
"""

from pydantic import BaseModel, Field


class LegendEntry(BaseModel):
    category: str
    color: str


class AxisTick(BaseModel):
    """A y-axis tick and its distance from the top of the plot area."""

    value: int
    label: str
    offset: int


class ChartSegment(BaseModel):
    """One category's slice of a day's bar."""

    category: str
    amount: float
    height: int = Field(..., ge=0)
    color: str


class ChartBar(BaseModel):
    date: str
    label: str = Field(..., description="Short weekday, e.g. 'Mon'")
    short_date: str = Field(..., description="MM/DD")
    total: float
    value_label: str = Field(..., description="Whole-unit total shown above the bar")
    segments: list[ChartSegment] = Field(default_factory=list)


class ChartModel(BaseModel):
    bar_max_height: int
    max_total: float = Field(
        ...,
        description="Largest day total (at least 1) used to scale bar heights"
    )
    axis_max: int = Field(
        ...,
        description="max_total rounded up to a multiple of 10"
    )
    ticks: list[AxisTick] = Field(default_factory=list)
    legend: list[LegendEntry] = Field(default_factory=list)
    bars: list[ChartBar] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.bars
