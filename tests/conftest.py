"""
Shared fixtures: real autoscaling/v1 model objects as returned by the Kubernetes API
"""

import pytest
from kubernetes import client


def build_hpa(name="web", minimum=2, maximum=10, cpu_target=50,
              current=4, desired=4, cpu=30, namespace="default"):
    return client.V1HorizontalPodAutoscaler(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
        spec=client.V1HorizontalPodAutoscalerSpec(
            min_replicas=minimum,
            max_replicas=maximum,
            target_cpu_utilization_percentage=cpu_target,
            scale_target_ref=client.V1CrossVersionObjectReference(
                api_version="apps/v1", kind="Deployment", name=name
            ),
        ),
        status=client.V1HorizontalPodAutoscalerStatus(
            current_replicas=current,
            desired_replicas=desired,
            current_cpu_utilization_percentage=cpu,
        ),
    )


@pytest.fixture
def make_hpa():
    """Factory for V1HorizontalPodAutoscaler objects"""
    return build_hpa
