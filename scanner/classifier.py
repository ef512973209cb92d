"""Local/external classification of module references."""

from .config import DEFAULT_CONFIG, ResolverConfig


def is_local_reference(reference: str, config: ResolverConfig = DEFAULT_CONFIG) -> bool:
    """
    Decide whether a reference points at a project file or an installed package.

    This is a naming heuristic with no knowledge of installed packages:
    - `./x`, `../x` and `/x` are local.
    - A name without any `/` (`lodash`) is a package.
    - The alias prefix (`@/x`) is local.
    - A scoped name with exactly one `/` (`@scope/pkg`) is a package.
    - Anything deeper (`@scope/pkg/sub`, `lib/x`) is treated as local.
    """
    if reference.startswith(("./", "../")):
        return True

    if reference.startswith("/"):
        return True

    if "/" not in reference:
        return False

    if reference.startswith(config.alias_prefix):
        return True

    if reference.startswith("@") and reference.count("/") == 1:
        return False

    return True
