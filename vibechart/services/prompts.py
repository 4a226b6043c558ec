from __future__ import annotations

from typing import Any, Dict, List, Tuple

TABLEAU = ["#4E79A7", "#F28E2B", "#E15759", "#76B7B2", "#59A14F"]
RAINBOW = ["#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7"]

CONFIG_SCHEMA = """{
  "chartType": "bar" | "line" | "scatter" | "area" | "pie",
  "xKey": "string",
  "yKey": "string",
  "palette": ["#hexcolor"],
  "axisStyle": "minimal" | "classic" | {"color": "#hex", "width": number},
  "animation": "none" | {"easing": "string", "duration": number},
  "font": {"family": "string", "size": number, "weight": number},
  "tooltipStyle": "shadow" | {"bg": "#hex", "border": "#hex"},
  "grid": "none" | "solid" | "dashed",
  "themePreset": "light" | "dark" | "vintage" | "macarons" | "custom" | "shadcn-dark",
  "barStyle": {
    "borderRadius": number (0-50),
    "width": number (1-100),
    "shadow": boolean,
    "gradient": boolean,
    "opacity": number (0-1),
    "colors": ["#hexcolor"],
    "borderColor": "#hexcolor",
    "borderWidth": number (0-10)
  },
  "lineStyle": {
    "width": number (1-20),
    "smooth": boolean,
    "areaOpacity": number (0-1),
    "lineOpacity": number (0-1),
    "shadow": boolean,
    "gradient": boolean
  },
  "scatterStyle": {
    "size": number (1-50),
    "shape": "circle" | "square" | "diamond" | "triangle",
    "opacity": number (0-1),
    "borderWidth": number (0-10)
  },
  "pieStyle": {
    "radius": number (10-100),
    "roseType": boolean,
    "donut": boolean,
    "center": [number | string, number | string],
    "gradient": boolean,
    "borderColor": "#hexcolor",
    "borderWidth": number (0-10),
    "borderRadius": number (0-50)
  },
  "backgroundColor": "#hexcolor (only use for light themes, otherwise keep default dark)",
  "borderStyle": {"color": "#hexcolor", "width": number (0-10), "type": "solid" | "dashed" | "dotted"},
  "legend": {"show": boolean, "position": "top" | "bottom" | "left" | "right", "textColor": "#hexcolor"},
  "title": {
    "text": "string",
    "color": "#hexcolor",
    "fontSize": number (8-32),
    "position": "top" | "bottom" | "left" | "right",
    "backgroundColor": "#hexcolor",
    "padding": "css padding string",
    "borderRadius": "css radius string",
    "border": "css border string",
    "show": boolean
  },
  "axisTitles": {
    "xTitle": {"text": "string", "fontSize": number (8-24), "fontFamily": "string",
               "fontWeight": number (100-900), "color": "#hexcolor", "nameGap": number (0-100)},
    "yTitle": {"text": "string", "fontSize": number (8-24), "fontFamily": "string",
               "fontWeight": number (100-900), "color": "#hexcolor", "nameGap": number (0-100)}
  },
  "axisLines": {"color": "#hexcolor", "width": number (1-10), "show": boolean},
  "axisLabels": {
    "xLabels": {"color": "#hexcolor", "fontSize": number (8-20), "fontFamily": "string",
                "fontWeight": number (100-900), "rotate": number (-90 to 90),
                "interval": number (0 = show all, 1 = every other, 2 = every third),
                "showMaxLabel": boolean, "margin": number,
                "formatter": {"strategy": "truncate" | "tail" | "hide-index", "length": integer, "index": integer}},
    "yLabels": { same fields as xLabels }
  },
  "binning": {"enabled": boolean, "groupSize": number (2-10), "method": "sum" | "average" | "max" | "min"},
  "chartSize": {"aspectRatio": number (0.3-3.0), "maxWidth": number, "maxHeight": number},
  "yAxis": {"min": number, "max": number, "scale": boolean, "type": "value" | "log"}
}"""

FORMATTER_NOTES = """Label formatters are never code. Use one of these strategies:
- "truncate": keep the first `length` characters of each label
- "tail": keep the last `length` characters of each label (e.g. 2024 -> 24 with length 2)
- "hide-index": blank the label at position `index` (0 = first label)"""

_OUTLINE_WHITE = {"borderColor": "#ffffff", "borderWidth": 2}

TWEAK_EXAMPLES: List[Tuple[str, Dict[str, Any]]] = [
    ("rounded bars", {"barStyle": {"borderRadius": 10}}),
    ("squared bars", {"barStyle": {"borderRadius": 0}}),
    ("wider bars", {"barStyle": {"width": 80}}),
    ("make bars different colors", {"barStyle": {"colors": TABLEAU}}),
    ("rainbow bars", {"barStyle": {"colors": RAINBOW}}),
    ("gradient bars", {"barStyle": {"gradient": True}}),
    ("colorful gradient bars", {"barStyle": {"gradient": True, "colors": TABLEAU}}),
    ("change pie chart colors", {"palette": TABLEAU}),
    ("rainbow pie", {"palette": RAINBOW}),
    ("gradient pie", {"pieStyle": {"gradient": True}}),
    ("light mode", {"themePreset": "light"}),
    ("switch to light", {"themePreset": "light"}),
    ("dark mode", {"themePreset": "shadcn-dark"}),
    ("cream background", {"backgroundColor": "#fdf6e3"}),
    ("warm background", {"backgroundColor": "#fef8e7"}),
    ("beige background", {"backgroundColor": "#f5f5dc"}),
    ("ivory background", {"backgroundColor": "#fffff0"}),
    ("white background", {"backgroundColor": "#ffffff"}),
    ("light blue background", {"backgroundColor": "#f0f8ff"}),
    ("light gray background", {"backgroundColor": "#f8f9fa"}),
    ("pink background", {"backgroundColor": "#fff0f5"}),
    ("mint background", {"backgroundColor": "#f0fff0"}),
    ("lavender background", {"backgroundColor": "#f8f4ff"}),
    ("peach background", {"backgroundColor": "#fff5ee"}),
    ("background color #e3f2fd", {"backgroundColor": "#e3f2fd"}),
    ("thick lines", {"lineStyle": {"width": 8}}),
    ("smooth curves", {"lineStyle": {"smooth": True}}),
    ("show lines", {"lineStyle": {"lineOpacity": 1}}),
    ("hide lines", {"lineStyle": {"lineOpacity": 0}}),
    ("area with lines", {"lineStyle": {"areaOpacity": 0.3, "lineOpacity": 1}}),
    ("large dots", {"scatterStyle": {"size": 20}}),
    ("add title", {"title": {"text": "Chart Title", "color": "#ffffff", "fontSize": 16, "position": "bottom"}}),
    ("remove title", {"title": {"show": False}}),
    (
        "title in box",
        {
            "title": {
                "text": "Chart Title",
                "position": "bottom",
                "backgroundColor": "#2a2a2a",
                "padding": "12px",
                "borderRadius": "6px",
                "border": "1px solid #444444",
            }
        },
    ),
    ("show legend", {"legend": {"show": True, "position": "bottom", "textColor": "#ffffff"}}),
    ("legend on top", {"legend": {"show": True, "position": "top", "textColor": "#ffffff"}}),
    ("legend on right", {"legend": {"show": True, "position": "right", "textColor": "#ffffff"}}),
    ("change x-axis title to 'Time Period'", {"axisTitles": {"xTitle": {"text": "Time Period"}}}),
    ("make y-axis title bigger", {"axisTitles": {"yTitle": {"fontSize": 18}}}),
    ("bigger axis titles", {"axisTitles": {"xTitle": {"fontSize": 18}, "yTitle": {"fontSize": 18}}}),
    ("remove grid lines", {"grid": "none"}),
    ("add grid lines", {"grid": "solid"}),
    ("dashed grid", {"grid": "dashed"}),
    ("no background lines", {"grid": "none"}),
    ("add outline to bars", {"barStyle": dict(_OUTLINE_WHITE)}),
    ("black outline on bars", {"barStyle": {"borderColor": "#000000", "borderWidth": 2}}),
    ("thick bar outline", {"barStyle": {"borderColor": "#ffffff", "borderWidth": 4}}),
    ("remove bar outline", {"barStyle": {"borderWidth": 0}}),
    ("pie chart outline", {"pieStyle": dict(_OUTLINE_WHITE)}),
    ("remove pie outline", {"pieStyle": {"borderWidth": 0}}),
    ("rotate x-axis labels", {"axisLabels": {"xLabels": {"rotate": 45}}}),
    ("vertical labels", {"axisLabels": {"xLabels": {"rotate": 90}}}),
    ("fix overlapping labels", {"axisLabels": {"xLabels": {"rotate": 45, "interval": 1}}}),
    ("show every other label", {"axisLabels": {"xLabels": {"interval": 1}}}),
    ("show every third label", {"axisLabels": {"xLabels": {"interval": 2}}}),
    ("fewer x labels", {"axisLabels": {"xLabels": {"interval": 1}}}),
    ("more space for labels", {"axisTitles": {"xTitle": {"nameGap": 100}, "yTitle": {"nameGap": 80}}}),
    ("tighten label spacing", {"axisTitles": {"xTitle": {"nameGap": 40}, "yTitle": {"nameGap": 40}}}),
    ("default spacing", {"axisTitles": {"xTitle": {"nameGap": 80}, "yTitle": {"nameGap": 60}}}),
    (
        "prevent label overlap",
        {"axisLabels": {"xLabels": {"rotate": 45, "interval": 1}}, "axisTitles": {"xTitle": {"nameGap": 50}}},
    ),
    ("group every 2 data points", {"binning": {"enabled": True, "groupSize": 2, "method": "sum"}}),
    ("bin every 3 points", {"binning": {"enabled": True, "groupSize": 3, "method": "average"}}),
    ("average every 2 points", {"binning": {"enabled": True, "groupSize": 2, "method": "average"}}),
    ("make chart wider", {"chartSize": {"aspectRatio": 2.0}}),
    ("make chart taller", {"chartSize": {"aspectRatio": 0.7}}),
    ("make chart square", {"chartSize": {"aspectRatio": 1.0}}),
    ("landscape chart", {"chartSize": {"aspectRatio": 2.2}}),
    ("portrait chart", {"chartSize": {"aspectRatio": 0.5}}),
    ("make y axis more dramatic", {"yAxis": {"scale": True}}),
    ("start y axis from zero", {"yAxis": {"scale": False}}),
    ("logarithmic y axis", {"yAxis": {"type": "log"}}),
    ("set y axis range 0 to 100", {"yAxis": {"min": 0, "max": 100}}),
    ("shorten year labels", {"axisLabels": {"xLabels": {"formatter": {"strategy": "tail", "length": 2}}}}),
    ("abbreviate x labels", {"axisLabels": {"xLabels": {"formatter": {"strategy": "truncate", "length": 3}}}}),
    ("hide first x label", {"axisLabels": {"xLabels": {"formatter": {"strategy": "hide-index", "index": 0}}}}),
]

SYSTEM_TEMPLATE = """You are a data visualization expert. Your job is to create complete chart configurations based on data analysis and user requests.

IMPORTANT: You can return either:
1. A COMPLETE configuration (when analyzing new data with empty currentConfig)
2. A PARTIAL configuration (when making tweaks to existing charts)

IMPORTANT JSON FORMATTING RULES:
- Use double quotes for all strings and property names
- No trailing commas
- No comments in JSON
- All property names must be quoted
- Use proper JSON syntax, not JavaScript object syntax

You can include any of these fields:
{{ schema }}

{{ formatter_notes }}

When analyzing new data (empty currentConfig):
- Choose the most appropriate chart type based on data structure
- Select meaningful x and y axes
- ALWAYS add a descriptive title that summarizes the chart content
- Include legends for categorical data, positioned at bottom by default
- Set xTitle nameGap to 80-100 and yTitle nameGap to 60-80
- Make axis titles bigger (fontSize: 16-18) and white (color: "#ffffff") by default
- Set grid to "none" by default unless the user asks for grid lines
- For light themes, use a warm cream background (#fdf6e3) unless the user specifies a color

When making tweaks (existing currentConfig):
- Return only the fields you want to change
- The system will merge with the current configuration

Examples of tweaks:
{% for instruction, patch in examples -%}
- "{{ instruction }}" -> {{ patch }}
{% endfor %}
Current config: {{ current_config }}

User request: "{{ user_prompt }}"

Return ONLY valid JSON. For new data analysis (empty currentConfig), return complete config. For tweaks, return only changed fields."""

USER_TEMPLATE = """{% if conversation -%}
Earlier requests in this conversation:
{% for turn in conversation -%}
- {{ turn }}
{% endfor %}
Current request:
{% endif -%}
{{ user_prompt }}"""

GENERATION_TEMPLATE = """You are a data visualization expert. Analyze this dataset and create a complete chart configuration.

DATASET:
{{ dataset_json }}

COLUMNS: {{ columns | join(', ') }}

DATA ANALYSIS:
{{ analysis_json }}

CHART TYPE SELECTION RULES (FOLLOW THESE EXACTLY):
1. If ANY column contains DATE/TIME data -> USE "line" chart type
2. If you have DATE + NUMERIC + CATEGORICAL -> USE "line" chart with separate lines for each category
3. If you have DATE + NUMERIC (no categories) -> USE "line" chart
4. Only use "bar" charts for PURELY CATEGORICAL comparisons (no dates involved)
5. Use "scatter" only for CORRELATION analysis between numeric fields
6. Use "area" for cumulative data over time
7. Use "pie" for simple categorical breakdowns (no dates)

CRITICAL: Based on the data analysis above, the chart type MUST be: "{{ recommended }}"

SPACING AND LAYOUT REQUIREMENTS:
{% if issues -%}
ISSUES DETECTED:
{% for issue in issues -%}
- {{ issue }}
{% endfor %}
RECOMMENDATIONS:
{% for rec in recommendations -%}
- {{ rec }}
{% endfor %}
YOU MUST ADDRESS THESE ISSUES IN YOUR CONFIGURATION.
{%- else -%}
No spacing issues detected - use standard spacing.
{%- endif %}

DATA DENSITY INFO:
- Total data points: {{ density.totalPoints }}
- Unique X-axis values: {{ density.uniqueXValues }}
- Unique categories: {{ density.uniqueCategories }}

TASK: Create a complete chart configuration with chart type "{{ recommended }}", x and y axis selections,
a descriptive title, a color palette, legend configuration, full styling, grid and layout settings,
axis title spacing that does not overlap labels, and label intervals suited to the data density.

When you see categorical columns, the chart shows one series per category; include a legend at the bottom.

Return ONLY valid JSON with the complete chart configuration. The chart type MUST be "{{ recommended }}"."""
