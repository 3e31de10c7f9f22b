"""Configuration for the style manager and the definition parser."""

from dataclasses import dataclass


@dataclass
class StyleConfig:
    """Tunable limits and constants shared by the style system."""

    max_style_name_length: int = 255
    stylesheet_namespace: str = "http://duckx.org/styles"
    schema_version: str = "1.0"
    percent_width_base_pts: float = 400.0
    max_font_size_pts: float = 1000.0
    max_table_width_pts: float = 2000.0
    max_border_width_pts: float = 20.0
    max_list_level: int = 8
    default_font: str = "Calibri"
    code_font: str = "Consolas"
    bullet_num_id: int = 1
    numbered_num_id: int = 2


DEFAULT_CONFIG = StyleConfig()
