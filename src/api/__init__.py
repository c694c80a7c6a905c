"""API — camada de borda e adapters de canais.

Responsabilidades:
- Receber mensagens do canal externo (long polling)
- Normalizar dados para modelos internos
- Construir payloads para APIs externas

Subpastas:
- connectors/: adapters HTTP por canal
- normalizers/: conversão de payloads externos → modelos internos
- payload_builders/: construção de payloads para APIs externas

NÃO PODE conter: regras de sessão, orquestração de use cases.
"""
