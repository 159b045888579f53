from .json_adapter import dump_tree, load_tree, tree_from_json, tree_to_json

__all__ = (
    "dump_tree",
    "load_tree",
    "tree_from_json",
    "tree_to_json",
)
