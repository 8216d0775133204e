from .resolvers import (
    DEFAULT_KIND_RESOLVERS,
    KindResolver,
    answered_kind_resolver,
    hub_base_url,
    is_valid_hub_address,
    kind_from_context,
    kind_from_declaration,
    kind_from_file_name,
    make_source_keyword_resolver,
    resolve_hub_address,
    resolve_kind,
)

__all__ = [
    "DEFAULT_KIND_RESOLVERS",
    "KindResolver",
    "answered_kind_resolver",
    "hub_base_url",
    "is_valid_hub_address",
    "kind_from_context",
    "kind_from_declaration",
    "kind_from_file_name",
    "make_source_keyword_resolver",
    "resolve_hub_address",
    "resolve_kind",
]
