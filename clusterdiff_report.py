import csv
import html
import pathlib
from typing import Dict, List, Sequence, Tuple, Union

import Levenshtein
import plotly.graph_objects as go
import tqdm

from clusterdiff import ComparisonSegment, ProcessedText

PathLike = Union[str, pathlib.Path]

CLUSTER_CSV_HEADER = ['Start Text 1', 'End Text 1', 'Start Text 2', 'End Text 2', 'Length', 'Difference', 'Content']

HTML_TEMPLATE_START = """<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8"><title>Cluster Comparison</title><style>
body{font-family:system-ui,-apple-system,BlinkMacSystemFont,Segoe UI,Roboto,Helvetica Neue,Arial,sans-serif;margin:20px;line-height:1.6;background-color:#f8f9fa}
.comparison-block{margin-bottom:2em;background-color:#fff;padding:1.5em;border-radius:8px;box-shadow:0 4px 6px rgba(0,0,0,.05);border:1px solid #dee2e6}
.comparison-container{display:flex;gap:20px;flex-wrap:wrap}@media(min-width:768px){.comparison-container{flex-wrap:nowrap}}
.text-box{flex:1 1 100%;min-width:300px;padding:15px;border:1px solid #ced4da;border-radius:5px;background-color:#fff;max-height:600px;overflow-y:auto}
h2{color:#212529;border-bottom:2px solid #e9ecef;padding-bottom:.5em;margin-top:0}
.file-info{font-size:.9em;color:#6c757d;margin-bottom:.5em;font-weight:700}
.highlight{background-color:#fff3b8;border-radius:3px}
.bridge-words{outline:1px dotted #e57373}
.bridge-word-similar-static{background-color:#fff9e0;border-radius:3px;padding:0 2px}
.bridge-word-dissimilar{background-color:#ffcdd2;border-radius:3px;padding:0 2px}
</style></head><body>"""
HTML_TEMPLATE_END = """
</body>
</html>"""


class ClusterVisualizer:
    @staticmethod
    def clusters_to_rows(records: Sequence[Dict[str, int]], processed_a: ProcessedText,
                         name_a: str = 'text1', name_b: str = 'text2') -> List[list]:
        rows = []
        for record in records:
            start_a, end_a = record[f'start_{name_a}'], record[f'end_{name_a}']
            content = ' '.join(processed_a.string_tokens[start_a:end_a])
            rows.append([start_a, end_a, record[f'start_{name_b}'], record[f'end_{name_b}'],
                         record['length'], record['differenz'], content])
        return rows

    @staticmethod
    def write_cluster_csv(records: Sequence[Dict[str, int]], processed_a: ProcessedText, path: PathLike,
                          name_a: str = 'text1', name_b: str = 'text2'):
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(CLUSTER_CSV_HEADER)
            writer.writerows(ClusterVisualizer.clusters_to_rows(records, processed_a, name_a, name_b))
        print(f"Generated {pathlib.Path(path).name}")

    @staticmethod
    def write_comparison_csv(segments: Sequence[ComparisonSegment], path: PathLike,
                             name_a: str = 'text1', name_b: str = 'text2'):
        header = ['Tag', f'Pos_{name_a}', f'Length_{name_a}', name_a,
                  f'Pos_{name_b}', f'Length_{name_b}', name_b, 'Length_Cluster', 'Cluster']
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(header)
            for segment in segments:
                writer.writerow(list(segment.as_row(name_a, name_b).values()))
        print(f"Generated {pathlib.Path(path).name}")

    @staticmethod
    def bubble_chart_figure(records: Sequence[Dict[str, int]], name_a: str = 'text1', name_b: str = 'text2') -> go.Figure:
        """Scatter of cluster starts in both texts, sized and colored by cluster length."""
        start_a = [r[f'start_{name_a}'] for r in records]
        start_b = [r[f'start_{name_b}'] for r in records]
        lengths = [r['length'] for r in records]
        hover = [f"Length: {r['length']}<br>{name_a}: {r[f'start_{name_a}']}-{r[f'end_{name_a}']}"
                 f"<br>{name_b}: {r[f'start_{name_b}']}-{r[f'end_{name_b}']}" for r in records]
        fig = go.Figure(data=go.Scatter(
            x=start_a, y=start_b, mode='markers', text=hover, hoverinfo='text',
            marker=dict(size=lengths, sizemode='area', sizeref=0.1, sizemin=5, color=lengths,
                        colorscale='Viridis', showscale=True, colorbar=dict(title='Cluster Length'))))
        fig.update_layout(title_text=f'Clusters: {name_a} vs {name_b}',
                          xaxis_title=f'Start {name_a}', yaxis_title=f'Start {name_b}')
        return fig

    @staticmethod
    def plot_cluster_bubbles(records: Sequence[Dict[str, int]], path: PathLike,
                             name_a: str = 'text1', name_b: str = 'text2'):
        ClusterVisualizer.bubble_chart_figure(records, name_a, name_b).write_html(str(path))
        print(f"Generated {pathlib.Path(path).name}")

    @staticmethod
    def render_gap_html(segment: ComparisonSegment, similarity_threshold: float = 0.65,
                        max_bridge_words: int = 3) -> Tuple[str, str]:
        """Renders the unique text of both sides; short gaps on both sides become bridge words."""
        str1, str2 = html.escape(segment.content_a), html.escape(segment.content_b)
        if not str1 and not str2:
            return "", ""
        num_words1, num_words2 = segment.length_a, segment.length_b
        if num_words1 <= max_bridge_words and num_words2 <= max_bridge_words:
            ratio = Levenshtein.ratio(segment.content_a.lower(), segment.content_b.lower())
            css = "bridge-word-similar-static" if ratio >= similarity_threshold else "bridge-word-dissimilar"
            html1 = f'<span class="bridge-words"><span class="{css}">{str1}</span></span>' if str1 else ""
            html2 = f'<span class="bridge-words"><span class="{css}">{str2}</span></span>' if str2 else ""
            return html1, html2
        return str1, str2

    @staticmethod
    def highlight_segments(segments: Sequence[ComparisonSegment]) -> Tuple[str, str]:
        html_text1, html_text2 = [], []
        m_id = 0
        for segment in tqdm.tqdm(segments, desc="Rendering segments", leave=False):
            if segment.is_cluster:
                content = html.escape(segment.cluster_content)
                html_text1.append(f'<span class="highlight" data-match-id="{m_id}">{content}</span>')
                html_text2.append(f'<span class="highlight" data-match-id="{m_id}">{content}</span>')
                m_id += 1
            else:
                gap1, gap2 = ClusterVisualizer.render_gap_html(segment)
                html_text1.append(gap1)
                html_text2.append(gap2)
        return " ".join(filter(None, html_text1)), " ".join(filter(None, html_text2))

    @staticmethod
    def generate_comparison_html(segments: Sequence[ComparisonSegment], path: PathLike,
                                 name_a: str = 'text1', name_b: str = 'text2'):
        n_clusters = sum(1 for s in segments if s.is_cluster)
        h1, h2 = ClusterVisualizer.highlight_segments(segments)
        block = f'<div class="comparison-block">' \
                f'<h2>Comparison: {html.escape(name_a)} &harr; {html.escape(name_b)}</h2>' \
                f'<p class="file-info">{n_clusters} shared clusters</p>' \
                f'<div class="comparison-container">' \
                f'<div class="text-box"><p class="file-info">{html.escape(name_a)}</p>{h1}</div>' \
                f'<div class="text-box"><p class="file-info">{html.escape(name_b)}</p>{h2}</div>' \
                f'</div></div>'
        with open(path, 'w', encoding='utf-8') as f:
            f.write(HTML_TEMPLATE_START + block + HTML_TEMPLATE_END)
        print(f"Generated {pathlib.Path(path).name}")
