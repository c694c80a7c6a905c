"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.provisioning import (
    ProvisionedAssistant,
    ProvisioningClientProtocol,
    list_documents,
    provision_assistant,
    provision_index,
)

__all__ = [
    "ProvisionedAssistant",
    "ProvisioningClientProtocol",
    "list_documents",
    "provision_assistant",
    "provision_index",
]
