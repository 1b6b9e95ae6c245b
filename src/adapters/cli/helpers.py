"""
Utilitaires partages pour les commandes CLI de Holocron.

Ce module fournit :
- console : instance Rich Console partagee
- with_container : decorateur injectant un container initialise
"""

from functools import wraps

from rich.console import Console

from src.container import Container

console = Console()


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator
