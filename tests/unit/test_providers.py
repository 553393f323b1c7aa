"""
Unit Tests for Providers, Tokens, Metadata, and Errors

Tests for provider normalization, token formatting, the class metadata
side table, and the structured data carried by container errors.
"""

import pytest

from tokenbox.di import (
    CircularDependencyError,
    ClassProvider,
    DependencyArityError,
    DependencyNotFoundError,
    FactoryProvider,
    InvalidProviderError,
    ProviderKind,
    Symbol,
    ValueProvider,
    class_dependencies,
    class_singleton,
    declare_dependencies,
    forget,
    format_path,
    format_token,
    injectable,
)
from tokenbox.di.providers import Registration, is_singleton, normalize_provider


class Database:
    pass


# =============================================================================
# Provider Tests
# =============================================================================


class TestProviderKinds:
    """Tests for the tagged provider dataclasses."""

    def test_discriminants(self):
        """Test that each provider carries its kind."""
        assert ClassProvider(Database).kind == ProviderKind.CLASS
        assert ValueProvider(1).kind == ProviderKind.VALUE
        assert FactoryProvider(lambda c: 1).kind == ProviderKind.FACTORY

    def test_class_provider_requires_class(self):
        """Test that use_class must be a class."""
        with pytest.raises(TypeError, match="use_class must be a class"):
            ClassProvider("Database")

    def test_factory_provider_requires_callable(self):
        """Test that use_factory must be callable."""
        with pytest.raises(TypeError, match="use_factory must be callable"):
            FactoryProvider(42)

    def test_class_provider_deps_stored_as_tuple(self):
        """Test that deps are frozen into a tuple."""
        provider = ClassProvider(Database, deps=["a", "b"])
        assert provider.deps == ("a", "b")

    def test_is_singleton(self):
        """Test singleton detection across kinds."""
        assert is_singleton(ClassProvider(Database, singleton=True))
        assert is_singleton(FactoryProvider(lambda c: 1, singleton=True))
        assert not is_singleton(ClassProvider(Database))
        assert not is_singleton(ValueProvider(1))
        assert not is_singleton({"use_class": Database, "singleton": True})


class TestNormalizeProvider:
    """Tests for registration shorthand normalization."""

    def test_class_shorthand(self):
        """Test that a bare class becomes a transient class provider."""
        assert normalize_provider(Database) == ClassProvider(Database)

    def test_class_shorthand_with_options(self):
        """Test that options are carried into the class provider."""
        provider = normalize_provider(Database, singleton=True, deps=["dsn"])
        assert provider == ClassProvider(Database, deps=("dsn",), singleton=True)

    def test_tagged_provider_unchanged(self):
        """Test that tagged providers pass through."""
        provider = ValueProvider({"port": 3000})
        assert normalize_provider(provider) is provider

    def test_mapping_use_value(self):
        """Test use_value mappings."""
        assert normalize_provider({"use_value": None}) == ValueProvider(None)

    def test_mapping_use_factory(self):
        """Test use_factory mappings."""

        def build(c):
            return 1

        provider = normalize_provider({"use_factory": build, "singleton": True})
        assert provider == FactoryProvider(build, singleton=True)

    def test_mapping_use_class_without_deps(self):
        """Test that omitted deps stay unspecified."""
        provider = normalize_provider({"use_class": Database})
        assert provider.deps is None

    @pytest.mark.parametrize(
        "mapping",
        [
            {},
            {"foo": "bar"},
            {"use_class": Database, "use_value": 1},
            {"use_class": "Database"},
            {"use_factory": 42},
        ],
    )
    def test_unclassifiable_mappings_kept_raw(self, mapping):
        """Test that invalid shapes are kept for resolution to reject."""
        assert normalize_provider(mapping) is mapping

    def test_other_objects_kept_raw(self):
        """Test that non-provider objects are kept as-is."""
        target = object()
        assert normalize_provider(target) is target

    def test_options_with_non_class(self):
        """Test that options require the class form."""
        with pytest.raises(TypeError):
            normalize_provider({"use_value": 1}, deps=["x"])


class TestRegistrationEntry:
    """Tests for registry entries."""

    def test_cache_state(self):
        """Test the cached-instance flag, including a cached None."""
        entry = Registration(ClassProvider(Database, singleton=True))
        assert not entry.has_instance

        entry.cache(None)
        assert entry.has_instance
        assert entry.instance is None


# =============================================================================
# Token Tests
# =============================================================================


class TestTokens:
    """Tests for token formatting."""

    def test_format_class(self):
        """Test that classes render as their declared name."""
        assert format_token(Database) == "Database"

    def test_format_string(self):
        """Test that strings render as themselves."""
        assert format_token("config") == "config"

    def test_format_symbol(self):
        """Test that symbols render as Symbol(description)."""
        assert format_token(Symbol("db")) == "Symbol(db)"
        assert format_token(Symbol()) == "Symbol()"

    def test_format_unknown(self):
        """Test the fallback placeholder."""
        assert format_token(42) == "UnknownToken"
        assert format_token(None) == "UnknownToken"

    def test_format_path(self):
        """Test path rendering."""
        assert format_path([Database, "config", Symbol("db")]) == (
            "Database -> config -> Symbol(db)"
        )

    def test_symbols_compare_by_identity(self):
        """Test that equal descriptions do not make equal symbols."""
        first = Symbol("db")
        assert first == first
        assert first != Symbol("db")
        assert len({first, Symbol("db")}) == 2


# =============================================================================
# Metadata Tests
# =============================================================================


class TestClassMetadata:
    """Tests for the class metadata side table."""

    def test_no_metadata(self):
        """Test that undeclared classes report None."""
        assert class_dependencies(Database) is None
        assert class_singleton(Database) is False

    def test_injectable(self):
        """Test decorator registration."""

        @injectable(deps=["dsn"], singleton=True)
        class Repository:
            pass

        assert class_dependencies(Repository) == ("dsn",)
        assert class_singleton(Repository) is True

    def test_class_attributes(self):
        """Test deps, dependencies, and singleton attributes."""

        class WithDeps:
            deps = ["a"]
            singleton = True

        class WithDependencies:
            dependencies = ("b",)

        assert class_dependencies(WithDeps) == ("a",)
        assert class_singleton(WithDeps) is True
        assert class_dependencies(WithDependencies) == ("b",)

    def test_non_sequence_attribute_ignored(self):
        """Test that a deps attribute that isn't a list or tuple is ignored."""

        class Odd:
            deps = "not-a-list"

        assert class_dependencies(Odd) is None

    def test_forget(self):
        """Test that forget drops the side-table entry."""

        class Repository:
            deps = ["fallback"]

        declare_dependencies(Repository, ["dsn"])
        assert class_dependencies(Repository) == ("dsn",)

        forget(Repository)
        assert class_dependencies(Repository) == ("fallback",)


# =============================================================================
# Error Tests
# =============================================================================


class TestErrors:
    """Tests for error messages and structured data."""

    def test_not_found(self):
        """Test the not-found diagnostic."""
        error = DependencyNotFoundError(Database)

        assert str(error) == "Dependency not registered: Database"
        assert error.to_dict() == {
            "error": "DependencyNotFoundError",
            "message": "Dependency not registered: Database",
            "token": "Database",
        }

    def test_circular(self):
        """Test the circular dependency diagnostic."""
        db = Symbol("db")
        error = CircularDependencyError([Database, db, Database])

        assert error.path == (Database, db, Database)
        assert str(error) == "Circular dependency detected: Database -> Symbol(db) -> Database"
        assert error.to_dict()["path"] == ["Database", "Symbol(db)", "Database"]

    def test_invalid_provider(self):
        """Test the invalid-provider diagnostic."""
        error = InvalidProviderError("cache")

        assert error.token == "cache"
        assert str(error) == "Invalid provider for token: cache"

    def test_arity(self):
        """Test the arity diagnostic."""
        error = DependencyArityError(Database, "2", 1)

        assert str(error) == (
            "Constructor for Database expects 2 argument(s) but 1 dependency declared"
        )
        assert error.to_dict()["expected"] == "2"
        assert error.to_dict()["declared"] == 1
        assert "0 dependencies declared" in str(DependencyArityError(Database, "1", 0))
