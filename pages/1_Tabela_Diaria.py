import streamlit as st

from ambiental.utils.export import pivot_to_frame
from ambiental.utils.pivot import filter_samples, samples_to_frame
from utils import UNITS, get_dataset_session

st.set_page_config(page_title="📋 Tabela Diária — Monitor Ambiental", layout="wide")

st.title("📋 Tabela Diária — Valores por Dia e Ambiente")
st.caption("Os mesmos dados do gráfico, em formato de tabela, e as amostras brutas do período.")

# =========================================================
# CARREGAMENTO DE DADOS
# =========================================================
session = get_dataset_session()

if session.is_empty or "resultado" not in st.session_state:
    st.warning("⚠️ Nenhum dado encontrado. Volte para a tela principal e carregue o arquivo Excel.")
    st.stop()

resultado = st.session_state["resultado"]
unidade = UNITS[resultado.parametro]

# =========================================================
# TABELA PIVOTADA
# =========================================================
st.markdown(f"### 📆 {resultado.parametro.value} ({unidade}) por dia")
c1, c2 = st.columns(2)
c1.metric("Dias", len(resultado.linhas))
c2.metric("Ambientes", len(resultado.ambientes))

st.dataframe(pivot_to_frame(resultado.linhas, resultado.ambientes), use_container_width=True, hide_index=True)

# =========================================================
# AMOSTRAS DO PERÍODO
# =========================================================
with st.expander("🧩 Amostras do período", expanded=False):
    data_inicio, data_fim = st.session_state.get("periodo", (None, None))
    df = samples_to_frame(filter_samples(session.samples, data_inicio, data_fim))
    st.write(f"Linhas: **{len(df)}**")
    st.dataframe(df, use_container_width=True, hide_index=True)
