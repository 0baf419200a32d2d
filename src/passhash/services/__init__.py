"""Service layer — session orchestration returning ServiceResult.

Services may import from domain and config.
They must never import from commands, output, or infrastructure;
concrete collaborators are injected through the protocols in contracts.
"""
