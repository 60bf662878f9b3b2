"""Unit tests for permissions.resolver module."""

import pytest

from mintydocs.hierarchy.definition import PageDefiner
from mintydocs.permissions.identity import Actor, RightNames, StaticIdentityProvider
from mintydocs.permissions.resolver import PermissionResolver, normalize_user_name

HIERARCHY_PAGES = [
    "Widget",
    "Draft:Widget",
    "Widget/1.9",
    "Widget/1.9/Guide",
    "Widget/1.9/Guide/Install",
    "Widget/1.10",
    "Widget/1.10/Guide",
    "Widget/1.10/Guide/Upgrade",
    "Widget/2.0",
    "Widget/2.0/Guide",
    "Draft:Widget/1.10/Guide",
    "Loose topic",
    "Draft:Loose draft",
]


def _can(permissions, model, check, identity, name):
    return getattr(permissions, check)(model.load(identity), Actor(name))


class TestNormalizeUserName:
    """Test cases for normalize_user_name function."""

    def test_matches_role_list_spelling(self):
        assert normalize_user_name("alice_smith") == "Alice smith"
        assert normalize_user_name("") == ""


class TestRoles:
    """Test cases for Product role checks."""

    def test_role_lists(self, permissions, model):
        product = model.load("Widget")
        assert permissions.user_is_admin(product, Actor("alice"))
        assert permissions.user_is_editor(product, Actor("Eve"))
        assert permissions.user_is_previewer(product, Actor("Pat"))
        assert not permissions.user_is_admin(product, Actor("Eve"))

    def test_defined_role_list_matches_every_entry(self, store, model, permissions):
        """A lowercase name after the first entry still grants the role."""
        store.add_page("Gadget")
        PageDefiner(model).define_product("Gadget", admins="alice, bob", editors="eve, pat_smith")

        product = model.load("Gadget")
        assert permissions.user_is_admin(product, Actor("bob"))
        assert permissions.user_is_admin(product, Actor("Bob"))
        assert permissions.user_is_editor(product, Actor("pat_smith"))
        assert not permissions.user_is_admin(product, Actor("carol"))

    def test_stored_role_list_compared_after_normalizing(self, store, model, permissions):
        """Role lists written directly to the store are normalized when checked."""
        store.add_page("Gadget", properties={"PageType": "Product", "ProductAdmins": "Alice, bob"})

        assert permissions.user_is_admin(model.load("Gadget"), Actor("bob"))
        assert not permissions.user_is_admin(model.load("Gadget"), Actor(""))


class TestCanView:
    """Test cases for PermissionResolver.can_view()."""

    def test_current_actor_is_default(self, permissions, model):
        """Without an explicit actor the provider's current user (Alice) is used."""
        assert permissions.can_view(model.load("Widget/2.0/Guide")) is True

    @pytest.mark.parametrize("identity,name,expected", [
        ("Widget", "", True),
        ("Widget/1.9/Guide", "Bob", True),
        ("Widget/1.10/Guide", "Bob", False),
        ("Widget/1.10/Guide", "Pat", True),
        ("Widget/1.10/Guide", "Viewer", True),
        ("Widget/2.0/Guide", "Alice", True),
        ("Widget/2.0/Guide", "Eve", False),
        ("Widget/2.0/Guide", "Root", True),
        ("Draft:Widget/1.10/Guide", "Bob", False),
        ("Draft:Widget/1.10/Guide", "Pat", True),
        ("Loose topic", "Bob", True),
        ("Draft:Loose draft", "Bob", False),
        ("Draft:Loose draft", "Viewer", True),
    ])
    def test_view(self, permissions, model, identity, name, expected):
        assert _can(permissions, model, "can_view", identity, name) is expected


class TestCanEdit:
    """Test cases for PermissionResolver.can_edit()."""

    @pytest.mark.parametrize("identity,name,expected", [
        ("Draft:Widget", "Alice", True),
        ("Draft:Widget", "Eve", False),
        ("Widget", "Alice", False),
        ("Widget", "Live", True),
        ("Widget/1.9/Guide/Install", "Bob", True),
        ("Widget/1.10/Guide/Upgrade", "Eve", True),
        ("Widget/1.10/Guide/Upgrade", "Writer", True),
        ("Widget/1.10/Guide/Upgrade", "Pat", False),
        ("Widget/2.0/Guide", "Alice", True),
        ("Widget/2.0/Guide", "Eve", False),
        ("Loose topic", "Bob", True),
    ])
    def test_edit(self, permissions, model, identity, name, expected):
        assert _can(permissions, model, "can_edit", identity, name) is expected

    def test_draft_shadow_blocks_editing(self, permissions, model):
        """A live page with a Draft counterpart is read-only, even for admins."""
        assert _can(permissions, model, "can_edit", "Widget/1.10/Guide", "Alice") is False
        assert _can(permissions, model, "can_edit", "Widget/1.10/Guide", "Root") is False

    def test_edit_live_right_overrides_shadow(self, permissions, model):
        assert _can(permissions, model, "can_edit", "Widget/1.10/Guide", "Live") is True

    def test_draft_page_itself_is_editable(self, permissions, model):
        assert _can(permissions, model, "can_edit", "Draft:Widget/1.10/Guide", "Eve") is True


class TestCanAdminister:
    """Test cases for PermissionResolver.can_administer()."""

    @pytest.mark.parametrize("identity,name,expected", [
        ("Widget/1.9/Guide", "Alice", True),
        ("Widget/1.9/Guide", "Eve", False),
        ("Widget/1.9/Guide", "Root", True),
        ("Draft:Widget/1.10/Guide", "Alice", True),
        ("Loose topic", "Alice", False),
        ("Loose topic", "Root", True),
    ])
    def test_administer(self, permissions, model, identity, name, expected):
        assert _can(permissions, model, "can_administer", identity, name) is expected


class TestMonotonicity:
    """Granting more rights never takes a permission away."""

    @pytest.mark.parametrize("check", ["can_view", "can_edit", "can_administer"])
    @pytest.mark.parametrize("weaker,stronger", [
        ("Bob", "Pat"),
        ("Pat", "Eve"),
        ("Eve", "Alice"),
        ("Bob", "Everything"),
        ("Alice", "Everything"),
        ("Viewer", "Everything"),
    ])
    def test_more_rights_never_remove_permissions(
        self, permissions, model, check, weaker, stronger
    ):
        for identity in HIERARCHY_PAGES:
            if _can(permissions, model, check, identity, weaker):
                assert _can(permissions, model, check, identity, stronger), identity


class TestCustomRightNames:
    """Test cases for configurable right names."""

    def test_renamed_administer_right(self, model):
        provider = StaticIdentityProvider({"Ops": ["docs-admin"]})
        permissions = PermissionResolver(model, provider, RightNames(administer="docs-admin"))

        assert permissions.can_administer(model.load("Widget/1.9/Guide"), Actor("Ops"))
        assert not permissions.can_view(model.load("Widget/1.10/Guide"), Actor(""))


class TestGlobalAdministrator:
    """The global administer right grants everything except editing a shadowed live page."""

    @pytest.mark.parametrize("identity", HIERARCHY_PAGES)
    def test_global_admin_may_do_everything(self, permissions, model, identity):
        page = model.load(identity)
        root = Actor("Root")

        assert permissions.can_view(page, root)
        assert permissions.can_administer(page, root)
        if not model.has_draft_shadow(identity):
            assert permissions.can_edit(page, root)
