"""Name adapter factory.

Creates the adapter for a naming strategy, either given explicitly or read
from the active settings.
"""

from typing import Dict, Optional, Type, Union

from persistkit.constants.database import NamingStrategy
from persistkit.naming.annotation import AnnotationNameAdapter
from persistkit.naming.base import NameAdapter
from persistkit.naming.snake_case import SnakeCaseNameAdapter


_ADAPTERS: Dict[NamingStrategy, Type[NameAdapter]] = {
    NamingStrategy.ANNOTATION: AnnotationNameAdapter,
    NamingStrategy.SNAKE_CASE: SnakeCaseNameAdapter,
}


def create_name_adapter(strategy: Union[NamingStrategy, str]) -> NameAdapter:
    """Create the name adapter for a naming strategy.

    Args:
        strategy: NamingStrategy member or its value (``"annotation"``,
            ``"snake_case"``)

    Returns:
        A new adapter instance

    Raises:
        ValueError: If the strategy is unknown
    """
    try:
        strategy = NamingStrategy(strategy)
    except ValueError:
        raise ValueError(
            f"Unsupported naming strategy: {strategy}. "
            f"Supported strategies: {', '.join(s.value for s in NamingStrategy)}"
        ) from None

    return _ADAPTERS[strategy]()


def get_name_adapter(strategy: Optional[Union[NamingStrategy, str]] = None) -> NameAdapter:
    """Get a name adapter, defaulting to the configured naming strategy.

    Example:
        >>> adapter = get_name_adapter()              # from NAMING_STRATEGY
        >>> adapter = get_name_adapter("annotation")  # explicit
    """
    if strategy is None:
        from persistkit.settings import get_settings

        strategy = get_settings().naming.strategy

    return create_name_adapter(strategy)
