from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, StrictBool, StrictStr
from pydantic.alias_generators import to_camel


def _require_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


def _require_integer(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("must be an integer")
    return value


Number = Annotated[Union[int, float], BeforeValidator(_require_number)]
Count = Annotated[int, BeforeValidator(_require_integer)]
Position = Literal["top", "bottom", "left", "right"]


class _Spec(BaseModel):
    """Config-wide conventions: camelCase on the wire, unknown keys dropped."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AxisStyleSpec(_Spec):
    color: StrictStr
    width: Number


class AnimationSpec(_Spec):
    easing: StrictStr
    duration: Number


class FontSpec(_Spec):
    family: StrictStr
    size: Number
    weight: Number


class TooltipStyleSpec(_Spec):
    bg: StrictStr
    border: StrictStr


class BarStyle(_Spec):
    border_radius: Optional[Number] = None
    width: Optional[Number] = None
    shadow: Optional[StrictBool] = None
    gradient: Optional[StrictBool] = None
    opacity: Optional[Number] = None
    colors: Optional[List[StrictStr]] = None
    border_color: Optional[StrictStr] = None
    border_width: Optional[Number] = None


class LineStyle(_Spec):
    width: Optional[Number] = None
    smooth: Optional[StrictBool] = None
    area_opacity: Optional[Number] = None
    line_opacity: Optional[Number] = None
    shadow: Optional[StrictBool] = None
    gradient: Optional[StrictBool] = None


class ScatterStyle(_Spec):
    size: Optional[Number] = None
    shape: Optional[Literal["circle", "square", "diamond", "triangle"]] = None
    opacity: Optional[Number] = None
    border_width: Optional[Number] = None


class PieStyle(_Spec):
    radius: Optional[Number] = None
    rose_type: Optional[StrictBool] = None
    donut: Optional[StrictBool] = None
    center: Optional[Union[List[Number], List[StrictStr]]] = None
    gradient: Optional[StrictBool] = None
    border_color: Optional[StrictStr] = None
    border_width: Optional[Number] = None
    border_radius: Optional[Number] = None


class BorderStyle(_Spec):
    color: Optional[StrictStr] = None
    width: Optional[Number] = None
    type: Optional[Literal["solid", "dashed", "dotted"]] = None


class LegendSpec(_Spec):
    show: Optional[StrictBool] = None
    position: Optional[Position] = None
    text_color: Optional[StrictStr] = None


class TitleSpec(_Spec):
    text: Optional[StrictStr] = None
    color: Optional[StrictStr] = None
    font_size: Optional[Number] = None
    position: Optional[Position] = None
    background_color: Optional[StrictStr] = None
    padding: Optional[StrictStr] = None
    border_radius: Optional[StrictStr] = None
    border: Optional[StrictStr] = None
    show: Optional[StrictBool] = None


class AxisTitle(_Spec):
    text: Optional[StrictStr] = None
    font_size: Optional[Number] = None
    font_family: Optional[StrictStr] = None
    font_weight: Optional[Number] = None
    color: Optional[StrictStr] = None
    name_gap: Optional[Number] = None


class AxisTitles(_Spec):
    x_title: Optional[AxisTitle] = None
    y_title: Optional[AxisTitle] = None


class AxisLines(_Spec):
    color: Optional[StrictStr] = None
    width: Optional[Number] = None
    show: Optional[StrictBool] = None


class LabelFormatter(_Spec):
    """Named label rewrite applied by the renderer instead of executable snippets."""

    strategy: Literal["truncate", "tail", "hide-index"]
    length: Count = 3
    index: Count = 0


class AxisLabel(_Spec):
    color: Optional[StrictStr] = None
    font_size: Optional[Number] = None
    font_family: Optional[StrictStr] = None
    font_weight: Optional[Number] = None
    rotate: Optional[Number] = None
    interval: Optional[Number] = None
    show_max_label: Optional[StrictBool] = None
    margin: Optional[Number] = None
    formatter: Optional[LabelFormatter] = None


class AxisLabels(_Spec):
    x_labels: Optional[AxisLabel] = None
    y_labels: Optional[AxisLabel] = None


class YAxisSpec(_Spec):
    min: Optional[Number] = None
    max: Optional[Number] = None
    scale: Optional[StrictBool] = None
    type: Optional[Literal["value", "log"]] = None


class BinningSpec(_Spec):
    enabled: Optional[StrictBool] = None
    group_size: Optional[Number] = None
    method: Optional[Literal["sum", "average", "max", "min"]] = None


class ChartSize(_Spec):
    aspect_ratio: Optional[Number] = None
    max_width: Optional[Number] = None
    max_height: Optional[Number] = None


class ChartConfiguration(_Spec):
    chart_type: Literal["bar", "line", "scatter", "area", "pie"]
    x_key: StrictStr
    y_key: StrictStr
    palette: List[StrictStr]
    axis_style: Union[Literal["minimal", "classic"], AxisStyleSpec]
    animation: Union[Literal["none"], AnimationSpec]
    font: FontSpec
    tooltip_style: Union[Literal["shadow"], TooltipStyleSpec]
    grid: Literal["none", "solid", "dashed"]
    theme_preset: Literal["light", "dark", "vintage", "macarons", "custom", "shadcn-dark"]
    bar_style: Optional[BarStyle] = None
    line_style: Optional[LineStyle] = None
    scatter_style: Optional[ScatterStyle] = None
    pie_style: Optional[PieStyle] = None
    background_color: Optional[StrictStr] = None
    border_style: Optional[BorderStyle] = None
    legend: Optional[LegendSpec] = None
    title: Optional[TitleSpec] = None
    axis_titles: Optional[AxisTitles] = None
    axis_lines: Optional[AxisLines] = None
    axis_labels: Optional[AxisLabels] = None
    y_axis: Optional[YAxisSpec] = None
    binning: Optional[BinningSpec] = None
    chart_size: Optional[ChartSize] = None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
