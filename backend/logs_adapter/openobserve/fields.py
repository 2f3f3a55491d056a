"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

# Column names of the OpenObserve log stream as written by the cluster agent.
TIMESTAMP = "_timestamp"
LOG = "log"
LOG_LEVEL = "logLevel"
COMPONENT_ID = "kubernetes_labels_openchoreo_dev_component_uid"
ENVIRONMENT_ID = "kubernetes_labels_openchoreo_dev_environment_uid"
PROJECT_ID = "kubernetes_labels_openchoreo_dev_project_uid"
NAMESPACE = "kubernetes_namespace_name"
POD_ID = "kubernetes_pod_id"
CONTAINER_NAME = "kubernetes_container_name"
LABELS = "labels"

# Alias of the aggregate column produced by alert queries
MATCH_COUNT = "match_count"
