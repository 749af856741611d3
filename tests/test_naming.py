"""
Tests for component naming.

Covers display-name normalization, project identifier suggestions and
field identifier sanitization for Java.
"""

import pytest

from aem_generator.codegen.core.naming import (
    NameSanitizer,
    bean_property,
    get_java_sanitizer,
    normalize,
    suggest_project_identifier,
    to_kebab,
)


class TestNormalize:
    """Tests for normalize()."""

    def test_two_words(self):
        """Test every variant of a simple two-word name."""
        names = normalize("Hero Banner")
        assert names.original == "Hero Banner"
        assert names.camel_case == "heroBanner"
        assert names.pascal_case == "HeroBanner"
        assert names.kebab_case == "hero-banner"
        assert names.snake_case == "hero_banner"
        assert names.constant_case == "HERO_BANNER"

    def test_separator_runs_and_edges(self):
        """Test that runs of separators collapse and edges are stripped."""
        names = normalize("  my--cool__component 2 ")
        assert names.camel_case == "myCoolComponent2"
        assert names.pascal_case == "MyCoolComponent2"
        assert names.kebab_case == "my-cool-component-2"
        assert names.snake_case == "my_cool_component_2"
        assert names.constant_case == "MY_COOL_COMPONENT_2"

    def test_segments_are_title_cased(self):
        """Test that later segments keep only their first letter upper-case."""
        names = normalize("CTA button")
        assert names.camel_case == "ctaButton"
        assert names.pascal_case == "CtaButton"

    def test_no_alphanumerics(self):
        """Test that a name without letters or digits yields empty variants."""
        names = normalize("!!! ---")
        assert names.is_empty
        assert names.camel_case == ""
        assert names.pascal_case == ""
        assert names.kebab_case == ""
        assert names.constant_case == ""

    @pytest.mark.parametrize("name", ["Hero Banner", "call to action", "Card 3 Column"])
    def test_rederiving_is_idempotent(self, name):
        """Test that normalizing a derived variant gives the same variants back."""
        names = normalize(name)
        again = normalize(names.kebab_case)
        assert again.kebab_case == names.kebab_case
        assert again.camel_case == names.camel_case
        assert again.snake_case == names.snake_case


class TestSuggestProjectIdentifier:
    """Tests for suggest_project_identifier()."""

    def test_strips_and_lowercases(self):
        assert suggest_project_identifier("Call To Action") == "calltoaction"

    def test_truncates_to_fifteen_characters(self):
        suggestion = suggest_project_identifier("A very long component name here")
        assert suggestion == "averylongcompon"
        assert len(suggestion) == 15

    def test_leading_digits_are_dropped(self):
        assert suggest_project_identifier("2 Column Layout") == "columnlayout"

    def test_falls_back_to_default(self):
        assert suggest_project_identifier("!!!") == "myproject"


class TestNameSanitizer:
    """Tests for Java field identifier sanitization."""

    def test_camel_case_identifier_is_kept(self):
        sanitizer = get_java_sanitizer()
        assert sanitizer.sanitize_name("backgroundImage") == "backgroundImage"

    def test_accessor_names(self):
        """Test getter and boolean accessor prefixes."""
        sanitizer = get_java_sanitizer()
        assert sanitizer.accessor_name("backgroundImage") == "getBackgroundImage"
        assert sanitizer.accessor_name("openInNewTab", boolean=True) == "isOpenInNewTab"

    def test_reserved_words_get_suffix(self):
        """Test Java keywords and model members are renamed."""
        sanitizer = get_java_sanitizer()
        assert sanitizer.sanitize_name("class") == "classValue"
        assert sanitizer.sanitize_name("resource") == "resourceValue"

    def test_accessor_follows_renamed_member(self):
        sanitizer = get_java_sanitizer()
        assert sanitizer.accessor_name("empty", boolean=True) == "isEmptyValue"
        assert sanitizer.accessor_name("class") == "getClassValue"

    def test_accessor_taken_by_model_method(self):
        """Test that an accessor may not shadow a method the model declares."""
        sanitizer = get_java_sanitizer()
        assert sanitizer.accessor_name("externalLink") == "getExternalLink"
        assert (
            sanitizer.accessor_name("externalLink", reserved=["isExternalLink"])
            == "getExternalLinkValue"
        )
        assert sanitizer.accessor_name("hasCta", reserved=["hasCta"]) == "getHasCtaValue"

    def test_bean_property(self):
        assert bean_property("isExternalLink") == "externalLink"
        assert bean_property("getImageSrc") == "imageSrc"
        assert bean_property("hasCta") == "hasCta"
        assert bean_property("issue") == "issue"

    def test_leading_digit(self):
        sanitizer = NameSanitizer()
        assert sanitizer.sanitize_name("3d") == "f3d"

    def test_kebab_for_css_elements(self):
        assert to_kebab("backgroundImage") == "background-image"
        assert to_kebab("ctaURL") == "cta-url"
