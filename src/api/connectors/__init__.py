"""Connectors por canal — adapters de borda para APIs externas.

Estrutura:
- telegram/: Telegram Bot API (long polling + sendMessage)

Cada canal tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
