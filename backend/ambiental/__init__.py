"""
Monitor Ambiental: ingestão de planilhas de amostras (temperatura, umidade,
CO2) e montagem dos dados de gráficos por dia e ambiente.
"""

__version__ = "1.0.0"
