import json

import pytest

from nginx_operator.codec import extract_nginx_spec
from nginx_operator.config import NginxDefaults, OperatorConfig, OwnerKind
from nginx_operator.errors import AnnotationCorrupt, UnrecognizedConfigKind
from nginx_operator.normalize import normalize
from nginx_operator.reconcile import has_drifted, reconcile
from nginx_operator.resources.nginx import Nginx


def _nginx(**spec) -> Nginx:
    return Nginx.model_validate(
        {
            "apiVersion": "nginx.tsuru.io/v1alpha1",
            "kind": "Nginx",
            "metadata": {"name": "web", "namespace": "default", "uid": "1234-abcd"},
            "spec": spec,
        }
    )


SPECS = [
    {"replicas": 3, "image": ""},
    {"config": {"kind": "Inline", "name": "custom", "value": "worker_processes 2;"}},
    {"config": {"kind": "ConfigMap", "name": "nginx-conf"}, "tlsSecret": {"secretName": "mysecret"}},
]


@pytest.mark.parametrize("spec", SPECS)
def test_reconcile_is_idempotent(spec):
    first = reconcile(_nginx(**spec))
    second = reconcile(_nginx(**spec))
    assert json.dumps([d.to_dict() for d in first.objects()]) == json.dumps(
        [d.to_dict() for d in second.objects()]
    )


@pytest.mark.parametrize("spec", SPECS)
def test_labels_and_selectors_match(spec):
    result = reconcile(_nginx(**spec))
    pod_labels = result.deployment.spec["template"]["metadata"]["labels"]
    assert pod_labels == {"nginx_cr": "web", "app": "nginx"}
    assert result.deployment.spec["selector"]["matchLabels"] == pod_labels
    assert result.service.spec["selector"] == pod_labels


@pytest.mark.parametrize("spec", SPECS)
def test_https_port_and_probe_follow_tls(spec):
    result = reconcile(_nginx(**spec))
    has_tls = "tlsSecret" in spec
    container = result.deployment.spec["template"]["spec"]["containers"][0]
    assert len(result.service.spec["ports"]) == (2 if has_tls else 1)
    assert container["readinessProbe"]["httpGet"]["scheme"] == ("HTTPS" if has_tls else "HTTP")


def test_scenario_defaults_only():
    result = reconcile(_nginx(replicas=3, image=""))
    container = result.deployment.spec["template"]["spec"]["containers"][0]
    assert container["image"] == "nginx:latest"
    assert len(container["ports"]) == 1
    assert "volumes" not in result.deployment.spec["template"]["spec"]
    assert result.deployment.spec["replicas"] == 3
    assert [port["port"] for port in result.service.spec["ports"]] == [80]


def test_stored_spec_reflects_resolved_tls_defaults():
    nginx = _nginx(tlsSecret={"secretName": "mysecret"})
    result = reconcile(nginx)
    stored = extract_nginx_spec(result.deployment.metadata, NginxDefaults())
    assert stored == result.spec
    assert stored.image == "nginx:latest"
    assert stored.tls_secret.certificate_path == "tls.crt"
    assert nginx.spec.tls_secret.certificate_path == ""


def test_custom_owner_kind_and_defaults():
    config = OperatorConfig(
        owner=OwnerKind(apiGroup="example.com", version="v1", kind="WebServer"),
        defaults=NginxDefaults(image="nginx:stable"),
    )
    result = reconcile(_nginx(), config)
    owner = result.service.metadata["ownerReferences"][0]
    assert owner["apiVersion"] == "example.com/v1"
    assert owner["kind"] == "WebServer"
    assert result.spec.image == "nginx:stable"


def test_unknown_config_kind_propagates():
    with pytest.raises(UnrecognizedConfigKind):
        reconcile(_nginx(config={"kind": "Secret", "name": "x"}))


def test_drift_detection():
    nginx = _nginx(replicas=2, tlsSecret={"secretName": "mysecret"})
    live = reconcile(nginx).deployment.metadata
    assert not has_drifted(live, nginx)
    assert has_drifted(live, _nginx(replicas=3, tlsSecret={"secretName": "mysecret"}))


def test_object_without_annotation_has_drifted():
    assert has_drifted({"name": "web-deployment"}, _nginx())


def test_corrupt_annotation_is_not_treated_as_drift():
    live = {"annotations": {"nginx.tsuru.io/generated-from": "{broken"}}
    with pytest.raises(AnnotationCorrupt):
        has_drifted(live, _nginx())


def test_stored_spec_is_the_normalized_spec():
    nginx = _nginx(config={"kind": "ConfigMap", "name": "nginx-conf"}, tlsSecret={"secretName": "s", "keyPath": "k.pem"})
    result = reconcile(nginx)
    expected = normalize(nginx.spec, NginxDefaults())
    assert result.spec == expected
    assert extract_nginx_spec(result.deployment.metadata, NginxDefaults()) == expected
    volumes = result.deployment.spec["template"]["spec"]["volumes"]
    assert volumes[1]["secret"]["items"][0] == {"key": "tls.key", "path": "k.pem"}
