import pytest

from code_snippets.domain.entities.snippet import SHARED_NETWORK_OPTION, Snippet
from code_snippets.domain.interfaces.snippet_environment_interface import ISnippetEnvironment
from code_snippets.domain.services.standalone_environment import StandaloneEnvironment


class CountingEnvironment(ISnippetEnvironment):
    def __init__(self, *, multisite=True, network_admin=None, shared_ids=None):
        self.multisite = multisite
        self.network_admin = network_admin
        self.shared_ids = list(shared_ids or [])
        self.option_calls = []
        self.admin_calls = 0

    def network_admin_context(self):
        self.admin_calls += 1
        return self.network_admin

    def is_multisite(self):
        return self.multisite

    def get_site_option(self, key, default=None):
        self.option_calls.append(key)
        return self.shared_ids


def test_tags_list_joins_with_comma_space():
    s = Snippet()
    s.set("tags", "a, b ,c")
    assert s.get("tags_list") == "a, b, c"
    assert s.tags_list == "a, b, c"


def test_tags_list_empty():
    assert Snippet().tags_list == ""


@pytest.mark.parametrize("scope, name", [(0, "global"), (1, "admin"), (2, "front-end")])
def test_scope_name(scope, name):
    s = Snippet({"scope": scope})
    assert s.get("scope_name") == name
    assert s.scope_name == name


def test_scope_name_custom_default_only_applies_to_global():
    assert Snippet({"scope": 0}).get_scope_name("everywhere") == "everywhere"
    assert Snippet({"scope": 1}).get_scope_name("everywhere") == "admin"
    assert Snippet({"scope": 2}).get_scope_name("everywhere") == "front-end"


def test_shared_network_is_computed_once():
    env = CountingEnvironment(shared_ids=[5, 9])
    s = Snippet({"id": 5, "network": True}, environment=env)

    assert s.shared_network is True
    assert s.get("shared_network") is True
    assert env.option_calls == [SHARED_NETWORK_OPTION]


def test_shared_network_false_when_id_not_shared():
    env = CountingEnvironment(shared_ids=["1", "2"])
    s = Snippet({"id": 3, "network": True}, environment=env)
    assert s.shared_network is False
    assert s.shared_network is False
    assert len(env.option_calls) == 1


def test_shared_network_compares_ids_as_integers():
    env = CountingEnvironment(shared_ids=["3"])
    assert Snippet({"id": 3, "network": True}, environment=env).shared_network is True


def test_shared_network_false_outside_multisite_without_lookup():
    env = CountingEnvironment(multisite=False, shared_ids=[5])
    s = Snippet({"id": 5, "network": True}, environment=env)
    assert s.shared_network is False
    assert env.option_calls == []


def test_shared_network_false_for_site_snippet_without_lookup():
    env = CountingEnvironment(shared_ids=[5])
    s = Snippet({"id": 5, "network": False}, environment=env)
    assert s.shared_network is False
    assert env.option_calls == []
    assert s.get_fields()["shared_network"] is False


def test_shared_network_written_value_is_used_as_cache():
    env = CountingEnvironment(shared_ids=[])
    s = Snippet({"id": 5, "network": True, "shared_network": True}, environment=env)
    assert s.shared_network is True
    assert env.option_calls == []


def test_network_unset_adopts_admin_context():
    env = CountingEnvironment(network_admin=True)
    s = Snippet(environment=env)
    s.set("network", None)
    assert s.network is True
    assert env.admin_calls == 1

    env.network_admin = False
    s.set("network", None)
    assert s.network is False


def test_network_unset_without_admin_screen_is_false():
    s = Snippet(environment=StandaloneEnvironment())
    s.set("network", None)
    assert s.network is False


def test_network_explicit_value_does_not_consult_admin_context():
    env = CountingEnvironment(network_admin=True)
    s = Snippet({"network": False}, environment=env)
    assert s.network is False
    assert env.admin_calls == 0


def test_standalone_environment_site_options():
    env = StandaloneEnvironment(multisite=True, site_options={SHARED_NETWORK_OPTION: [1]})
    s = Snippet({"id": 1, "network": True}, environment=env)
    assert s.shared_network is True

    env.update_site_option(SHARED_NETWORK_OPTION, [])
    assert Snippet({"id": 1, "network": True}, environment=env).shared_network is False
    assert env.get_site_option("missing", "dflt") == "dflt"


def test_custom_tag_parser_is_used():
    class UpperParser:
        def parse(self, tags):
            return [t.upper() for t in tags.split("|")]

    s = Snippet({"tags": "a|b"}, tag_parser=UpperParser())
    assert s.tags == ["A", "B"]
    assert s.tags_list == "A, B"
