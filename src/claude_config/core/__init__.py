# src/claude_config/core/__init__.py
"""
Core do claude_config.

Este pacote reúne a implementação canônica, independente de CLI e GUI,
de todas as operações sobre o arquivo de configuração em camadas.

O core é projetado para ser:
    - determinístico
    - síncrono e sem estado compartilhado entre chamadas
    - testável de forma isolada (apenas filesystem local)

Componentes principais:
    - types        → tipos compartilhados (escopo, entradas, diffs, backups)
    - errors       → hierarquia canônica de exceções
    - config       → documento, loader, validação, merge, diff e key-path
    - backup       → Backup Store
    - atomic_write → Atomic Writer
    - search       → Search Engine
    - import_export→ exportação/importação por extensão
    - paths        → diretórios de plataforma e descoberta de projeto
    - project      → varredura de projetos
    - manager      → fachada por escopo
    - servers      → CRUD de servidores MCP
    - settings     → configuração da própria ferramenta

Princípios fundamentais:
    - Nenhum cache de documento persiste entre chamadas
    - Toda leitura re-parseia o arquivo em disco
    - Falhas de backup abortam a escrita

Limites explícitos:
    - Não implementa protocolos de rede
    - Não executa subprocessos
"""
