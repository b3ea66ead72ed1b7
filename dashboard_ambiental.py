import streamlit as st
from datetime import date

from ambiental.config import settings
from ambiental.models.sample import Parametro
from ambiental.utils.export import export_filename, export_pivot_to_excel
from ambiental.utils.pivot import filter_and_pivot
from utils import (
    ASPECT_RATIOS,
    CHART_TYPES,
    PALETTES,
    THEMES,
    assign_colors,
    build_chart,
    get_dataset_session,
    handle_upload,
    image_export_config,
    upload_key,
)

# =========================================================
# CONFIG + ESTILO
# =========================================================
st.set_page_config(page_title="Monitor Ambiental • Visualizador de Amostras", layout="wide")

if "tema" not in st.session_state:
    st.session_state["tema"] = settings.DEFAULT_THEME

tema = st.session_state["tema"]
cores_tema = THEMES[tema]

st.markdown(f"""
<style>
div[data-testid="stMetric"] {{
  background: {cores_tema["background"]};
  border-radius: 18px;
  padding: 14px 16px;
  border: 1px solid rgba(0,255,204,0.10);
}}
</style>
""", unsafe_allow_html=True)

st.title("🌡️ Monitor Ambiental — Temperatura, Umidade e CO2")
st.caption("Envie a planilha de amostras para visualizar a evolução diária por ambiente.")

# =========================================================
# UPLOAD + LEITURA
# =========================================================
uploaded = st.file_uploader(
    "📂 Carregue o Excel (.xlsx) com as colunas **Temperatura**, **Umidade**, **CO2**, **Data** e **Ambiente**",
    type=[ext.lstrip(".") for ext in settings.ALLOWED_EXTENSIONS]
)

with st.expander("📘 Modelo de referência da planilha"):
    st.markdown("""
- Apenas a **primeira aba** é lida e a **linha 1** é sempre tratada como cabeçalho.
- Colunas por posição: `Temperatura`, `Umidade`, `CO2`, `Data`, `Ambiente`.
- Datas como data do Excel ou texto `DD/MM/AAAA`; números aceitam vírgula decimal.
- Linhas sem ambiente, sem medições ou com data inválida são ignoradas.
""")

session = get_dataset_session()

if uploaded is not None:
    arquivo_id = upload_key(uploaded)
    if st.session_state.get("arquivo_id") != arquivo_id:
        st.session_state["arquivo_id"] = arquivo_id
        report = handle_upload(uploaded, session)
        if report is not None:
            st.success(f"✅ {len(report.samples)} amostras carregadas.")
            if report.total_descartadas:
                st.warning(
                    f"⚠️ {report.total_descartadas} linhas ignoradas por dados ausentes "
                    f"(linhas {', '.join(str(n) for n in report.linhas_descartadas[:10])}"
                    f"{'…' if report.total_descartadas > 10 else ''})."
                )

if session.is_empty:
    st.info("⬆️ Bem-vindo! Envie sua planilha .xlsx para começar.")
    st.stop()

samples = session.samples
st.caption(f"Arquivo atual: **{session.nome_arquivo}** • {len(samples)} amostras")

# =========================================================
# 🔧 PERSONALIZAÇÃO (SIDEBAR)
# =========================================================
datas = [s.data for s in samples]

# Faixa de valores volta ao automático quando o parâmetro muda
parametro_atual = st.session_state.get("parametro", Parametro.TEMPERATURA.value)
if st.session_state.get("parametro_anterior") != parametro_atual:
    st.session_state["parametro_anterior"] = parametro_atual
    st.session_state["valor_min"] = ""
    st.session_state["valor_max"] = ""

with st.sidebar:
    st.header("🔎 Filtros")

    periodo = st.date_input(
        "Período",
        value=(min(datas), max(datas)),
        min_value=date(1900, 1, 1),
    )
    if isinstance(periodo, (tuple, list)):
        data_inicio = periodo[0] if len(periodo) > 0 else None
        data_fim = periodo[1] if len(periodo) > 1 else None
    else:
        data_inicio, data_fim = periodo, None

    st.header("🎨 Exibição e Estilo")
    st.radio(
        "Tema",
        options=list(THEMES.keys()),
        format_func=lambda t: "Escuro" if t == "dark" else "Claro",
        key="tema",
        horizontal=True,
    )
    paleta = st.selectbox(
        "Paleta de cores",
        list(PALETTES.keys()),
        index=list(PALETTES.keys()).index(settings.DEFAULT_PALETTE) if settings.DEFAULT_PALETTE in PALETTES else 0,
    )
    mostrar_pontos = st.toggle("Mostrar pontos", value=True)
    espessura = st.slider("Espessura da linha", min_value=1, max_value=8, value=2)
    proporcao = st.selectbox("Proporção", list(ASPECT_RATIOS.keys()), format_func=lambda p: "Auto" if p == "auto" else p)

    st.header("📏 Faixa de valores (eixo Y)")
    c_min, c_max = st.columns(2)
    valor_min = c_min.text_input("Mínimo", key="valor_min")
    valor_max = c_max.text_input("Máximo", key="valor_max")

# =========================================================
# PARÂMETRO + TIPO DE GRÁFICO
# =========================================================
c1, c2 = st.columns(2)
with c1:
    parametro = Parametro(st.radio(
        "Parâmetro",
        [p.value for p in Parametro],
        horizontal=True,
        key="parametro",
    ))
with c2:
    tipo = st.radio(
        "Tipo de Gráfico",
        list(CHART_TYPES.keys()),
        format_func=lambda t: CHART_TYPES[t],
        horizontal=True,
    )


def _to_float(texto: str):
    try:
        return float(texto.replace(",", ".")) if texto.strip() else None
    except ValueError:
        st.sidebar.warning(f"⚠️ Valor inválido ignorado: {texto}")
        return None


resultado = filter_and_pivot(samples, data_inicio, data_fim, parametro)

# Cores por ambiente: paleta + ajustes manuais
with st.sidebar:
    st.header("🖌️ Cores por ambiente")
    cores_base = assign_colors(resultado.ambientes, paleta)
    overrides = {
        amb: st.color_picker(amb, value=cor, key=f"cor_{paleta}_{amb}")
        for amb, cor in cores_base.items()
    }
cores = assign_colors(resultado.ambientes, paleta, overrides)

# Guardar em sessão para a página de tabela
st.session_state["resultado"] = resultado
st.session_state["periodo"] = (data_inicio, data_fim)

st.markdown("---")

if not resultado.linhas:
    st.info("Nenhum dado para exibir no período selecionado.")
    st.stop()

fig = build_chart(
    resultado.linhas,
    resultado.ambientes,
    parametro,
    cores,
    tipo=tipo,
    mostrar_pontos=mostrar_pontos,
    espessura=espessura,
    tema=st.session_state["tema"],
    faixa_valores=(_to_float(valor_min), _to_float(valor_max)),
    proporcao=proporcao,
)
st.plotly_chart(fig, use_container_width=True, config=image_export_config(parametro))

# =========================================================
# EXPORTAÇÃO
# =========================================================
c3, c4 = st.columns([1, 3])
with c3:
    st.download_button(
        "⬇️ Exportar Dados (XLSX)",
        data=export_pivot_to_excel(resultado.linhas, parametro, resultado.ambientes),
        file_name=export_filename(parametro),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
with c4:
    st.caption(f"{len(resultado.linhas)} dias • {len(resultado.ambientes)} ambientes • use o ícone 📷 do gráfico para baixar a imagem")
