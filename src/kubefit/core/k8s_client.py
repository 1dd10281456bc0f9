# src/kubefit/core/k8s_client.py
"""
Shared Kubernetes configuration loading and API client construction.

All collectors of one run read from the same source: an explicit kubeconfig
file, or in-cluster configuration with the default kubeconfig as fallback.
"""

import asyncio
import logging
import typing

from kubernetes_asyncio import client, config

logger = logging.getLogger(__name__)

# Serializes config loading across concurrently initializing collectors
_CONFIG_LOCK = asyncio.Lock()
_CONFIG_LOADED = False
_LOADED_FROM: typing.Optional[str] = None


def _is_loaded(kubeconfig: typing.Optional[str]) -> bool:
    return _CONFIG_LOADED and (kubeconfig is None or kubeconfig == _LOADED_FROM)


async def _load_file(kubeconfig: str) -> bool:
    try:
        await config.load_kube_config(config_file=kubeconfig)
    except config.ConfigException as e:
        logger.error("Invalid kubeconfig %s: %s", kubeconfig, e)
        return False
    except Exception as e:
        logger.error("Unexpected error loading kubeconfig %s: %s", kubeconfig, e)
        return False
    logger.info("Loaded Kubernetes configuration from %s.", kubeconfig)
    return True


async def _load_default_chain() -> bool:
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration.")
        return True
    except config.ConfigException:
        logger.debug("Not running in a cluster; falling back to the default kubeconfig.")
    except Exception as e:
        logger.warning("Unexpected error loading in-cluster config: %s", e)

    try:
        await config.load_kube_config()
        logger.info("Loaded Kubernetes configuration from the default kubeconfig.")
        return True
    except config.ConfigException:
        logger.warning("Could not find kubeconfig file.")
    except Exception as e:
        logger.warning("Unexpected error loading kubeconfig: %s", e)
    return False


async def ensure_k8s_config(kubeconfig: typing.Optional[str] = None) -> bool:
    """
    Loads the Kubernetes configuration once per source.

    When ``kubeconfig`` is given only that file is tried. Otherwise in-cluster
    configuration is tried first, then the default kubeconfig.

    Returns:
        bool: True if a configuration is loaded, False otherwise.
    """
    global _CONFIG_LOADED, _LOADED_FROM

    if _is_loaded(kubeconfig):
        return True

    async with _CONFIG_LOCK:
        if _is_loaded(kubeconfig):
            return True

        loaded = await _load_file(kubeconfig) if kubeconfig else await _load_default_chain()
        if loaded:
            _CONFIG_LOADED, _LOADED_FROM = True, kubeconfig
        else:
            logger.warning("Failed to load any Kubernetes configuration.")
        return loaded


async def get_core_v1_api(kubeconfig: typing.Optional[str] = None) -> typing.Optional[client.CoreV1Api]:
    """Returns a configured CoreV1Api (nodes, pods), or None without configuration."""
    if await ensure_k8s_config(kubeconfig):
        return client.CoreV1Api()
    return None


async def get_scheduling_v1_api(kubeconfig: typing.Optional[str] = None) -> typing.Optional[client.SchedulingV1Api]:
    """Returns a configured SchedulingV1Api (priority classes)."""
    if await ensure_k8s_config(kubeconfig):
        return client.SchedulingV1Api()
    return None


async def get_custom_objects_api(
    kubeconfig: typing.Optional[str] = None,
) -> typing.Optional[client.CustomObjectsApi]:
    """Returns a configured CustomObjectsApi (metrics.k8s.io)."""
    if await ensure_k8s_config(kubeconfig):
        return client.CustomObjectsApi()
    return None
