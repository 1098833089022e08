from nginx_operator.config import NginxDefaults
from nginx_operator.normalize import normalize, normalize_tls_secret
from nginx_operator.resources.nginx import NginxSpec, TLSSecret


DEFAULTS = NginxDefaults()


def test_empty_image_gets_default_tag():
    spec = normalize(NginxSpec(replicas=3), DEFAULTS)
    assert spec.image == "nginx:latest"
    assert spec.replicas == 3


def test_explicit_image_is_kept():
    spec = normalize(NginxSpec(image="nginx:1.25-alpine"), DEFAULTS)
    assert spec.image == "nginx:1.25-alpine"


def test_tls_secret_with_only_name_gets_conventional_fields():
    secret = normalize_tls_secret(TLSSecret(secretName="mysecret"), DEFAULTS)
    assert secret.secret_name == "mysecret"
    assert secret.key_field == "tls.key"
    assert secret.certificate_field == "tls.crt"
    assert secret.key_path == "tls.key"
    assert secret.certificate_path == "tls.crt"


def test_tls_paths_follow_custom_field_names():
    secret = normalize_tls_secret(
        TLSSecret(secretName="s", keyField="private.pem", certificateField="chain.pem", certificatePath="cert.pem"),
        DEFAULTS,
    )
    assert secret.key_path == "private.pem"
    assert secret.certificate_path == "cert.pem"


def test_normalize_does_not_mutate_input():
    original = NginxSpec(tlsSecret=TLSSecret(secretName="mysecret"))
    normalized = normalize(original, DEFAULTS)
    assert original.image == ""
    assert original.tls_secret.key_field == ""
    assert normalized.tls_secret.key_field == "tls.key"
