"""
Kubernetes Access
Kubeconfig loading, HPA selection and persistence via the autoscaling/v1 API
"""

import copy
import logging
import os
from typing import Dict, List, Optional

from kubernetes import client
from kubernetes import config as k8s_config
from kubernetes.client.rest import ApiException

from hpascale.bounds import BoundsRecord
from hpascale.config_validator import ConfigurationError

logger = logging.getLogger(__name__)

SERVICE_ACCOUNT_NAMESPACE = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"


def load_kube_client(kubeconfig: str, context: Optional[str] = None) -> client.AutoscalingV1Api:
    """
    Create an autoscaling/v1 API client.

    Uses the kubeconfig file when it exists, otherwise the in-cluster
    service account.
    """
    if os.path.exists(kubeconfig):
        k8s_config.load_kube_config(config_file=kubeconfig, context=context)
        logger.debug(f"Loaded Kubernetes config from {kubeconfig} (context: {context or 'current'})")
    else:
        try:
            k8s_config.load_incluster_config()
        except k8s_config.ConfigException as e:
            raise ConfigurationError(f"No kubeconfig at {kubeconfig} and not running in a cluster") from e
        logger.debug("Loaded in-cluster Kubernetes config")

    return client.AutoscalingV1Api()


def resolve_namespace(namespace: Optional[str], kubeconfig: str, context: Optional[str] = None) -> str:
    """Return `namespace`, or the namespace of the kubeconfig context when not given"""
    if namespace:
        return namespace

    if not os.path.exists(kubeconfig) and os.path.exists(SERVICE_ACCOUNT_NAMESPACE):
        with open(SERVICE_ACCOUNT_NAMESPACE) as f:
            return f.read().strip()

    try:
        contexts, active = k8s_config.list_kube_config_contexts(config_file=kubeconfig)
    except (k8s_config.ConfigException, OSError) as e:
        raise ConfigurationError(f"Cannot read contexts from {kubeconfig}: {e}") from e

    selected = active
    if context:
        selected = next((c for c in contexts if c.get('name') == context), None)
        if selected is None:
            raise ConfigurationError(f"Context {context} not found in {kubeconfig}")

    resolved = ((selected or {}).get('context') or {}).get('namespace')
    if not resolved:
        raise ConfigurationError("Namespace is not set in the current context and no namespace flag provided")

    logger.debug(f"Using namespace {resolved} from context {(selected or {}).get('name')}")
    return resolved


def label_selector(labels: Dict[str, str]) -> str:
    """Build a k=v,k=v selector, keys sorted"""
    return ",".join(f"{key}={labels[key]}" for key in sorted(labels.keys()))


def record_from_hpa(hpa) -> BoundsRecord:
    """Convert a V1HorizontalPodAutoscaler into a BoundsRecord"""
    spec = hpa.spec
    status = hpa.status
    target_ref = spec.scale_target_ref

    return BoundsRecord(
        name=hpa.metadata.name,
        namespace=hpa.metadata.namespace or "",
        reference=f"{target_ref.kind}/{target_ref.name}" if target_ref else "",
        # Kubernetes defaults minReplicas to 1
        minimum=spec.min_replicas if spec.min_replicas is not None else 1,
        maximum=spec.max_replicas or 0,
        cpu_target=spec.target_cpu_utilization_percentage,
        current_replicas=(status.current_replicas or 0) if status else 0,
        desired_replicas=(status.desired_replicas or 0) if status else 0,
        current_cpu_utilization=status.current_cpu_utilization_percentage if status else None,
    )


class HpaClient:
    """Select HPAs in one namespace and write updated bounds back"""

    def __init__(self, api: client.AutoscalingV1Api, namespace: str):
        self.api = api
        self.namespace = namespace
        # Fetched objects by name, written back on persist
        self.hpas: Dict[str, object] = {}

    def get_hpas(self, names: List[str]) -> List:
        """Fetch HPAs by name; names that cannot be fetched are skipped"""
        hpas = []
        for name in names:
            try:
                hpa = self.api.read_namespaced_horizontal_pod_autoscaler(name, self.namespace)
            except ApiException as e:
                logger.warning(f"Failed to get HPA {name}: {e.reason or e}")
                continue
            hpas.append(hpa)
        self._remember(hpas)
        return hpas

    def list_hpas(self, labels: Optional[Dict[str, str]] = None) -> List:
        """List HPAs in the namespace, optionally filtered by labels"""
        kwargs = {}
        if labels:
            kwargs['label_selector'] = label_selector(labels)

        hpa_list = self.api.list_namespaced_horizontal_pod_autoscaler(self.namespace, **kwargs)
        hpas = list(hpa_list.items)
        logger.debug(f"Found {len(hpas)} HPA(s) in {self.namespace} {kwargs or ''}".rstrip())
        self._remember(hpas)
        return hpas

    def select(self, names: Optional[List[str]] = None, labels: Optional[Dict[str, str]] = None) -> List[BoundsRecord]:
        """Explicit names win over labels; without either, every HPA in the namespace"""
        if names:
            hpas = self.get_hpas(names)
        else:
            hpas = self.list_hpas(labels)
        return [record_from_hpa(hpa) for hpa in hpas]

    def persist(self, record: BoundsRecord):
        """Write the record's bounds back onto its HPA and replace it"""
        hpa = self.hpas.get(record.name)
        if hpa is None:
            raise KeyError(f"HPA {record.name} was not fetched from {self.namespace}")

        # The cached object only changes once the API accepted the update
        body = copy.deepcopy(hpa)
        body.spec.min_replicas = record.minimum
        body.spec.max_replicas = record.maximum
        if record.cpu_target is not None:
            body.spec.target_cpu_utilization_percentage = record.cpu_target

        self.hpas[record.name] = self.api.replace_namespaced_horizontal_pod_autoscaler(
            record.name, self.namespace, body
        )

    def _remember(self, hpas: List):
        for hpa in hpas:
            self.hpas[hpa.metadata.name] = hpa
