"""
Cotador: cotação de peças de celular a partir de pedidos em texto livre.
"""

__version__ = "0.1.0"
