# src/kubefit/collectors/priority_class_collector.py

import logging
from typing import List

from kubernetes_asyncio.client.rest import ApiException

from ..core.k8s_client import get_scheduling_v1_api
from ..models.resources import PriorityClassInfo
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class PriorityClassCollector(BaseCollector):
    """Lists PriorityClasses, highest value first."""

    async def _create_client(self):
        return await get_scheduling_v1_api(self.kubeconfig)

    async def collect(self) -> List[PriorityClassInfo]:
        api = await self._ensure_client()
        if not api:
            logger.debug("Kubernetes client not configured; skipping priority classes.")
            return []

        try:
            classes = await api.list_priority_class(watch=False)
        except ApiException as e:
            logger.warning("Kubernetes API error while listing priority classes: %s", e)
            return []
        except Exception as e:
            logger.warning("Unexpected error while listing priority classes: %s", e)
            return []

        infos = [
            PriorityClassInfo(name=item.metadata.name, value=item.value or 0) for item in classes.items or []
        ]
        return sorted(infos, key=lambda info: info.value, reverse=True)
