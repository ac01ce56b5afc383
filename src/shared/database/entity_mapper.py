from typing import Dict, Type, Callable, Any


class EntityMapper:
    """Registry dispatching a domain model instance to its entity converter."""

    def __init__(self, entity_mappings: Dict[Type, Callable[[Any], Any]] | None = None):
        self.entity_mappings: Dict[Type, Callable[[Any], Any]] = dict(entity_mappings or {})

    def register(self, model_type: Type, to_entity: Callable[[Any], Any]) -> "EntityMapper":
        self.entity_mappings[model_type] = to_entity
        return self

    def supports(self, model_type: Type) -> bool:
        return model_type in self.entity_mappings

    def map_to_entity(self, model_instance: Any):
        model_type = type(model_instance)
        if not self.supports(model_type):
            raise ValueError(f"No entity mapping registered for {model_type.__name__}")
        return self.entity_mappings[model_type](model_instance)
