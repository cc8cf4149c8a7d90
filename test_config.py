# test_config.py
import pytest

from supportdesk.config import create_config, default_config, load_overrides, merge_config
from supportdesk.errors import ConfigError


def test_defaults_without_environment():
    config = create_config(env={})
    assert config.brand.name == "Customer Support"
    assert config.smtp.host == "smtp.gmail.com"
    assert config.smtp.port == 587
    assert config.smtp.secure is False
    assert not config.smtp.has_credentials
    assert config.support_email == "support@example.com"
    assert [f.key for f in config.custom_fields] == ["email"]
    assert config.priorities == ("Low", "Medium", "High", "Urgent")


def test_environment_feeds_smtp_defaults():
    env = {
        "SMTP_HOST": "mail.acme.example",
        "SMTP_PORT": "465",
        "SMTP_SECURE": "true",
        "SMTP_USER": "bot@acme.example",
        "SMTP_PASS": "s3cret",
        "SUPPORT_EMAIL": "help@acme.example",
    }
    config = create_config(env=env)
    assert config.smtp.host == "mail.acme.example"
    assert config.smtp.port == 465
    assert config.smtp.secure is True
    assert config.smtp.auth.user == "bot@acme.example"
    assert config.smtp.auth.password == "s3cret"
    assert config.smtp.has_credentials
    assert config.support_email == "help@acme.example"


def test_brand_name_override_keeps_other_defaults():
    base = create_config(env={})
    config = create_config({"brand": {"name": "Acme"}}, env={})
    assert config.brand.name == "Acme"
    assert config.brand.primary_color == base.brand.primary_color
    assert config.brand.tagline == base.brand.tagline
    assert config.smtp == base.smtp
    assert config.support_email == base.support_email


def test_smtp_auth_merges_one_level_deeper():
    env = {"SMTP_USER": "bot@acme.example", "SMTP_PASS": "from-env"}
    config = create_config({"smtp": {"port": 2525, "auth": {"pass": "override"}}}, env=env)
    assert config.smtp.port == 2525
    assert config.smtp.host == "smtp.gmail.com"
    assert config.smtp.auth.user == "bot@acme.example"
    assert config.smtp.auth.password == "override"


def test_custom_fields_override_replaces_list():
    config = create_config(
        {"custom_fields": [{"key": "phone", "label": "Phone", "type": "tel"}]}, env={}
    )
    assert [f.key for f in config.custom_fields] == ["phone"]


def test_merge_is_pure():
    base = default_config(env={})
    overrides = {"brand": {"name": "Acme"}, "priorities": ["P1"]}
    merged = merge_config(base, overrides)
    merged["priorities"].append("P2")
    assert base["brand"]["name"] == "Customer Support"
    assert overrides["priorities"] == ["P1"]


def test_none_and_non_mapping_sections_fall_through():
    merged = merge_config(default_config(env={}), {"brand": "Acme", "support_email": None})
    assert merged["brand"]["name"] == "Customer Support"
    assert merged["support_email"] == "support@example.com"


def test_config_is_immutable():
    config = create_config(env={})
    with pytest.raises(Exception):
        config.support_email = "other@example.com"
    with pytest.raises(Exception):
        config.brand.name = "Other"


def test_duplicate_custom_field_keys_rejected():
    fields = [
        {"key": "email", "label": "Email"},
        {"key": "email", "label": "Work Email"},
    ]
    with pytest.raises(ConfigError, match="duplicate custom field key 'email'"):
        create_config({"custom_fields": fields}, env={})


def test_invalid_leaf_raises_config_error():
    with pytest.raises(ConfigError):
        create_config({"smtp": {"port": "not-a-port"}}, env={})


def test_load_overrides_from_yaml(tmp_path):
    path = tmp_path / "support.yaml"
    path.write_text("brand:\n  name: Acme\npriorities: [P1, P2]\n")
    assert load_overrides(str(path)) == {"brand": {"name": "Acme"}, "priorities": ["P1", "P2"]}


def test_load_overrides_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_overrides(str(path)) == {}


def test_load_overrides_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigError):
        load_overrides(str(path))


def test_load_overrides_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_overrides(str(tmp_path / "nope.yaml"))


def test_example_config_file_resolves():
    config = create_config(load_overrides("config/support.yaml"), env={})
    assert config.brand.name == "Acme Help Desk"
    assert config.brand.primary_color == "#2563eb"
    assert [f.key for f in config.custom_fields] == ["email", "phone", "plan"]
    assert config.custom_fields[2].options == ("Free", "Pro", "Enterprise")


@pytest.mark.parametrize("key", ["name", "issue", "priority", "category"])
def test_custom_field_cannot_redefine_fixed_field(key):
    with pytest.raises(ConfigError, match=f"custom field key '{key}' is reserved"):
        create_config({"custom_fields": [{"key": key, "label": "Nickname"}]}, env={})
