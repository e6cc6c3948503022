"""Volume name derivation.

Each user namespace owns a fixed family of cluster-scoped persistent
volumes named ``<username><suffix>``. Suffixes carry their own leading
delimiter (usually ``-``), so names are concatenated verbatim.
"""

from collections.abc import Sequence

# Volume suffixes provisioned for every user on the DSMLP cluster
DEFAULT_VOLUME_SUFFIXES: tuple[str, ...] = (
    "-dsmlp-datasets",
    "-dsmlp-datasets-nfs",
    "-home",
    "-home-nfs",
    "-nbgrader",
    "-support",
    "-teams",
)


def derive_volume_names(username: str, suffixes: Sequence[str]) -> list[str]:
    """Derive the volume names owned by a user.

    The result always contains one name per suffix, in suffix order,
    whether or not the volumes exist in the cluster.

    Args:
        username: Owner of the namespace.
        suffixes: Configured volume suffixes.

    Returns:
        List of volume names.

    Raises:
        ValueError: If username is empty.
    """
    if not username:
        msg = "Username cannot be empty"
        raise ValueError(msg)
    return [f"{username}{suffix}" for suffix in suffixes]
