"""Request-scoped user context for capability checks."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    SUB_USER = "sub_user"


# Capability keys, one per back-office area
CAPABILITIES: tuple[str, ...] = (
    "dashboard",
    "obras",
    "colaboradores",
    "alojamento",
    "veiculos",
    "fichario_funcoes",
    "ferramentas",
    "financeiro",
    "contas_pagar",
    "pagamento_colaboradores",
    "notas_fiscais",
    "aluguel_equipamentos",
    "orcamentos",
    "configuracoes",
)


class UserContext(BaseModel):
    """The user on whose behalf an operation runs."""

    user_id: str | None = None
    role: Role = Role.SUB_USER
    permissions: dict[str, bool] = Field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.role in (Role.SUPER_ADMIN, Role.ADMIN)
