class KubefitError(Exception):
    """Base exception for kubefit."""

    pass


class ClusterUnreachableError(KubefitError):
    """Raised when node enumeration returns nothing: the cluster is unreachable or has no nodes."""

    pass


class KubeconfigNotFoundError(KubefitError):
    """Raised when an explicitly requested kubeconfig file does not exist."""

    pass
