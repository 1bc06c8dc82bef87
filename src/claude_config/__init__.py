# src/claude_config/__init__.py
"""
claude_config: gerenciamento determinístico da configuração em camadas.

Este pacote raiz define o namespace público do claude_config, responsável
por ler, mesclar, validar, comparar, pesquisar, versionar (backup) e
gravar de forma atômica o arquivo de configuração JSON de uma ferramenta
de desenvolvimento, em duas camadas: global (usuário) e projeto.

Princípios centrais:
    - Nenhuma escrita ocorre sem cópia de segurança dos dados existentes
    - A mesma entrada sempre produz o mesmo merge e o mesmo diff
    - Campos desconhecidos são preservados (compatibilidade futura)
    - Todo erro é tipado, descritivo e acionável

Arquitetura em alto nível:
    - core.config   → modelo do documento, loader, validação, merge e diff
    - core.backup   → snapshots com timestamp, retenção e restauração
    - core.atomic_write → escrita temp + rename protegida por backup
    - core.search   → busca recursiva por chaves e valores
    - core.manager  → fachada de operações por escopo (global/projeto)

Limites explícitos:
    - Não contém CLI nem ponte de GUI (colaboradores externos)
    - Não arbitra escrita concorrente entre processos (last-writer-wins)
"""
# src/claude_config/__init__.py
from .core.config.document import ConfigDocument
from .core.errors import ConfigError
from .core.manager import ConfigManager
from .core.types import ConfigScope, ServerEntry, SkillEntry

__version__ = "0.1.0"

__all__ = [
    "ConfigDocument",
    "ConfigError",
    "ConfigManager",
    "ConfigScope",
    "ServerEntry",
    "SkillEntry",
    "__version__",
]
