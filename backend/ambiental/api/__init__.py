"""
Rotas da API
"""
