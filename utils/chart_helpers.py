"""
Estilo e montagem do gráfico (camada de apresentação).
Cores por ambiente são derivadas da lista de ambientes filtrados.
"""
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd
import plotly.graph_objects as go

from ambiental.models.sample import Parametro, PivotRow


PALETTES: Dict[str, List[str]] = {
    "Floresta": ["#2d6a4f", "#40916c", "#52b788", "#95d5b2", "#7f5539", "#b08968", "#ddb892", "#ede0d4"],
    "Oceano": ["#0077b6", "#00b4d8", "#90e0ef", "#ade8f4", "#caf0f8", "#03045e", "#023e8a", "#0096c7"],
    "Metrópole": ["#212529", "#495057", "#adb5bd", "#003566", "#006d77", "#ffc300", "#6c757d", "#dee2e6"],
    "Vulcão": ["#d00000", "#dc2f02", "#e85d04", "#f48c06", "#faa307", "#ffba08", "#9d0208", "#6a040f"],
    "Monocromático": ["#004d40", "#00796b", "#009688", "#4db6ac", "#80cbc4", "#b2dfdb", "#e0f2f1", "#64b5f6"],
}

THEMES: Dict[str, Dict[str, str]] = {
    "dark": {
        "background": "#1f2937",
        "text": "#f3f4f6",
        "grid": "rgba(107, 114, 128, 0.2)",
        "template": "plotly_dark",
    },
    "light": {
        "background": "#ffffff",
        "text": "#111827",
        "grid": "rgba(55, 65, 81, 0.2)",
        "template": "plotly_white",
    },
}

CHART_TYPES = {"line": "Linha", "bar": "Barras", "area": "Área"}

UNITS = {
    Parametro.TEMPERATURA: "°C",
    Parametro.UMIDADE: "%",
    Parametro.CO2: "ppm",
}

# Altura em px para largura de referência de 1000px; "auto" usa altura fixa
ASPECT_RATIOS: Dict[str, Optional[float]] = {
    "auto": None,
    "16:9": 16 / 9,
    "4:3": 4 / 3,
    "1:1": 1.0,
}
AUTO_HEIGHT = 450
REFERENCE_WIDTH = 1000


def assign_colors(
    ambientes: Sequence[str],
    paleta: str,
    overrides: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Cor do ambiente i = paleta[i % len(paleta)]; cores escolhidas pelo usuário prevalecem."""
    cores = PALETTES.get(paleta) or PALETTES["Floresta"]
    resultado = {amb: cores[i % len(cores)] for i, amb in enumerate(ambientes)}
    for amb, cor in (overrides or {}).items():
        if amb in resultado:
            resultado[amb] = cor
    return resultado


def chart_height(proporcao: str) -> int:
    ratio = ASPECT_RATIOS.get(proporcao)
    if ratio is None:
        return AUTO_HEIGHT
    return int(REFERENCE_WIDTH / ratio)


def build_chart(
    linhas: Sequence[PivotRow],
    ambientes: Sequence[str],
    parametro: Parametro,
    cores: Dict[str, str],
    tipo: str = "line",
    mostrar_pontos: bool = True,
    espessura: float = 2,
    tema: str = "dark",
    faixa_valores: Tuple[Optional[float], Optional[float]] = (None, None),
    proporcao: str = "auto",
    cores_tema: Optional[Dict[str, str]] = None,
) -> go.Figure:
    """
    Monta o gráfico Plotly com uma série por ambiente.

    Dias sem medição de um ambiente são ligados diretamente (connectgaps),
    sem desenhar zero.
    """
    parametro = Parametro.parse(parametro)
    theme = {**THEMES.get(tema, THEMES["dark"]), **(cores_tema or {})}
    unidade = UNITS[parametro]
    x = pd.to_datetime([linha.sort_key for linha in linhas], unit="ms")

    fig = go.Figure()
    for ambiente in ambientes:
        y = [linha.valores.get(ambiente) for linha in linhas]
        cor = cores.get(ambiente, "#ffffff")
        hover = f"{ambiente}: %{{y:,.2f}} {unidade}<extra></extra>"
        if tipo == "bar":
            fig.add_trace(go.Bar(x=x, y=y, name=ambiente, marker_color=cor, hovertemplate=hover))
        else:
            fig.add_trace(go.Scatter(
                x=x,
                y=y,
                name=ambiente,
                mode="lines+markers" if mostrar_pontos else "lines",
                connectgaps=True,
                line=dict(color=cor, width=espessura),
                marker=dict(size=6, color=cor),
                fill="tozeroy" if tipo == "area" else None,
                hovertemplate=hover,
            ))

    minimo, maximo = faixa_valores
    yaxis = dict(title=f"{parametro.value} ({unidade})", gridcolor=theme["grid"])
    if minimo is not None or maximo is not None:
        yaxis["range"] = [minimo, maximo]

    fig.update_layout(
        template=theme["template"],
        title=f"Evolução de {parametro.value}",
        paper_bgcolor=theme["background"],
        plot_bgcolor=theme["background"],
        font=dict(color=theme["text"]),
        xaxis=dict(title="Data", tickformat="%d/%m", gridcolor=theme["grid"]),
        yaxis=yaxis,
        hovermode="x unified",
        height=chart_height(proporcao),
        legend=dict(orientation="h", yanchor="top", y=-0.2),
    )
    return fig


def image_export_config(parametro: Parametro, hoje: Optional[str] = None) -> dict:
    """Configuração do botão de download de imagem do Plotly"""
    parametro = Parametro.parse(parametro)
    hoje = hoje or pd.Timestamp.today().strftime("%Y-%m-%d")
    return {
        "toImageButtonOptions": {
            "format": "png",
            "filename": f"grafico-{parametro.value}-{hoje}",
            "scale": 2,
        },
        "displaylogo": False,
    }
