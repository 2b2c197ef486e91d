from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ChartConfig:
    wordcloud_max_words: int = 100
    wordcloud_width: int = 1000
    wordcloud_height: int = 800
    top_n_features: int = 20  # lollipop chart
    top_n_terms: int = 10  # per-topic term-probability bars
    top_n_countries: int = 30  # sentiment bar chart
    figsize: tuple[float, float] = (12, 6)
    dpi: int = 150
    colormap: str = "tab20"
