"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: fluxo por mensagem e loop de despacho
- services/: provisionamento do assistente
- infra/: implementações concretas de IO
- protocols/: contratos/interfaces
- sessions/: histórico limitado por usuário
- observability/: correlation_id para logs estruturados
- constants/: respostas fixas

Padrão: app executa; api adapta; ai decodifica; utils apoia.
"""
