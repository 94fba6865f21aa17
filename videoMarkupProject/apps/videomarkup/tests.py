from datetime import timedelta
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from apps.videomarkup.forms import VideoMarkupConfigForm, build_form_field
from apps.videomarkup.models import CacheEntry, ModuleSetting
from apps.videomarkup.options import PROVIDERS, VIMEO, YOUTUBE, YOUTUBE_OPTIONS
from apps.videomarkup.services.cache_store import CacheStore
from apps.videomarkup.services.compiler import compile_all, compile_option
from apps.videomarkup.services.editor import editor_attrs
from apps.videomarkup.services.exceptions import CacheStoreError, SettingsStoreError
from apps.videomarkup.services.fields import (
    COLLAPSED_BLANK,
    OptionDescriptor,
    Toggle,
)
from apps.videomarkup.services.layout import (
    build_inputfields,
    cache_status_message,
    iter_fields,
)
from apps.videomarkup.services.settings_store import ModuleSettingsStore
from utils.utils import render_inline_markdown, strip_namespace

OWNER = "TextformatterVideoMarkup"


def _plain(options):
    return {key: str(label) for key, label in options.items()}


class OptionCompilerTests(SimpleTestCase):
    """Tests for provider option descriptor normalization."""

    def test_missing_type_defaults_to_select(self) -> None:
        """Descriptors without `type` should compile to select fields."""

        spec = compile_option(YOUTUBE, "fs", {"label": "Fullscreen"})
        self.assertEqual(spec.type, "select")

    def test_select_without_options_gets_binary_choices(self) -> None:
        """Select descriptors without options should get unset/Disable/Enable."""

        spec = compile_option(YOUTUBE, "fs", {"label": "Fullscreen"})
        self.assertEqual(
            _plain(spec.options), {"": "", "0": "Disable", "1": "Enable"}
        )

    def test_missing_collapsed_defaults_to_blank(self) -> None:
        """Descriptors without `collapsed` should be hidden until populated."""

        spec = compile_option(VIMEO, "loop", {"label": "Loop"})
        self.assertEqual(spec.collapsed, COLLAPSED_BLANK)

    def test_explicit_collapsed_zero_is_kept(self) -> None:
        """An explicit `collapsed=0` must not be replaced by the default."""

        spec = compile_option(VIMEO, "loop", {"label": "Loop", "collapsed": 0})
        self.assertEqual(spec.collapsed, 0)

    def test_youtube_autoplay_compiles_to_select(self) -> None:
        """`yt`/`autoplay` with only a label should compile to a full select field."""

        data = compile_option(YOUTUBE, "autoplay", {"label": "Autoplay"}).as_dict()
        data["options"] = _plain(data["options"])
        self.assertEqual(
            data,
            {
                "name": "yt_autoplay",
                "type": "select",
                "options": {"": "", "0": "Disable", "1": "Enable"},
                "collapsed": 2,
                "label": "Autoplay",
            },
        )

    def test_vimeo_color_text_field_gets_no_options(self) -> None:
        """Text descriptors keep their placeholder and get no injected options."""

        spec = compile_option(
            VIMEO,
            "color",
            {"type": "text", "label": "Color", "placeholder": "00ADEF"},
        )
        self.assertEqual(
            spec.as_dict(),
            {
                "name": "vm_color",
                "type": "text",
                "collapsed": 2,
                "label": "Color",
                "placeholder": "00ADEF",
            },
        )

    def test_integer_and_textarea_descriptors_keep_placeholder(self) -> None:
        """Integer and textarea descriptors with a placeholder should compile."""

        width = compile_option(
            VIMEO, "width", {"type": "integer", "label": "W", "placeholder": "640"}
        )
        notes = compile_option(
            VIMEO, "notes", {"type": "textarea", "label": "N", "placeholder": "..."}
        )
        self.assertEqual(width.type, "integer")
        self.assertEqual(width.placeholder, "640")
        self.assertEqual(notes.type, "textarea")
        self.assertEqual(notes.placeholder, "...")

    def test_select_descriptor_with_placeholder_compiles(self) -> None:
        """A placeholder on a select descriptor should not break compilation."""

        spec = compile_option(
            YOUTUBE, "fs", {"label": "Fullscreen", "placeholder": "ignored"}
        )
        self.assertEqual(spec.type, "select")
        self.assertEqual(list(spec.options), ["", "0", "1"])

    def test_integer_placeholder_reaches_widget(self) -> None:
        """The compiled placeholder should be rendered on the number input."""

        spec = compile_option(
            VIMEO, "width", {"type": "integer", "label": "W", "placeholder": "640"}
        )
        form_field = build_form_field(spec)
        self.assertEqual(form_field.widget.attrs["placeholder"], "640")

    def test_explicit_select_options_are_kept(self) -> None:
        """Author-supplied select options should be used as-is."""

        spec = compile_option(
            YOUTUBE, "iv_load_policy", YOUTUBE_OPTIONS["iv_load_policy"]
        )
        self.assertEqual(list(spec.options), ["", "1", "3"])

    def test_descriptor_object_and_mapping_compile_alike(self) -> None:
        """Mappings and `OptionDescriptor` instances should compile identically."""

        from_mapping = compile_option(YOUTUBE, "rel", {"label": "Related"})
        from_object = compile_option(YOUTUBE, "rel", OptionDescriptor(label="Related"))
        self.assertEqual(from_mapping, from_object)

    def test_compiling_twice_is_identical(self) -> None:
        """Compilation keeps no state between calls."""

        descriptor = YOUTUBE_OPTIONS["cc_lang_pref"]
        self.assertEqual(
            compile_option(YOUTUBE, "cc_lang_pref", descriptor),
            compile_option(YOUTUBE, "cc_lang_pref", descriptor),
        )

    def test_compile_all_keeps_authoring_order(self) -> None:
        """Batch compilation of a mapping should follow its key order."""

        specs = compile_all(YOUTUBE, YOUTUBE_OPTIONS)
        self.assertEqual(
            [spec.name for spec in specs],
            [f"yt_{key}" for key in YOUTUBE_OPTIONS],
        )

    def test_compile_all_accepts_key_descriptor_pairs(self) -> None:
        """Batch compilation of `(key, descriptor)` pairs should follow their order."""

        specs = compile_all(
            VIMEO,
            [
                ("loop", {"label": "Loop"}),
                ("color", OptionDescriptor(label="Color", type="text")),
                ("autoplay", {"label": "Autoplay"}),
            ],
        )
        self.assertEqual(
            [(spec.name, spec.type) for spec in specs],
            [("vm_loop", "select"), ("vm_color", "text"), ("vm_autoplay", "select")],
        )

    def test_provider_tables_compile_with_unique_names(self) -> None:
        """Every provider table should compile to unique, prefixed field names."""

        for provider in PROVIDERS:
            specs = compile_all(provider.namespace, provider.options)
            names = [spec.name for spec in specs]
            self.assertEqual(len(names), len(set(names)))
            self.assertTrue(
                all(name.startswith(f"{provider.namespace}_") for name in names)
            )


class ModuleSettingsStoreTests(TestCase):
    """Tests for persisted module settings and unset handling."""

    def setUp(self) -> None:
        self.store = ModuleSettingsStore(OWNER)

    def test_values_fall_back_to_defaults(self) -> None:
        """An empty store should expose the default settings."""

        self.assertEqual(
            self.store.values(),
            {"emptyValue": "", "maxWidth": 1280, "maxHeight": 720},
        )

    def test_disabled_is_persisted_and_unset_is_removed(self) -> None:
        """`"0"` should be stored while `None` should delete the row."""

        self.store.save({"yt_autoplay": "0"})
        self.assertEqual(self.store.toggle("yt_autoplay"), Toggle.DISABLED)

        self.store.save({"yt_autoplay": None})
        self.assertEqual(self.store.toggle("yt_autoplay"), Toggle.UNSET)
        self.assertFalse(
            ModuleSetting.objects.filter(module=OWNER, key="yt_autoplay").exists()
        )

    def test_provider_params_omit_unset_options(self) -> None:
        """Provider params should contain set options only, without the prefix."""

        self.store.save(
            {"yt_autoplay": "1", "yt_fs": "0", "yt_hl": None, "vm_loop": Toggle.ENABLED}
        )
        self.assertEqual(self.store.provider_params(YOUTUBE), {"autoplay": "1", "fs": "0"})
        self.assertEqual(self.store.provider_params(VIMEO), {"loop": "1"})

    def test_save_reports_changed_keys_only(self) -> None:
        """Saving should return only the keys whose stored value changed."""

        self.assertEqual(self.store.save({"maxWidth": 640, "emptyValue": None}), ["maxWidth"])
        self.assertEqual(self.store.save({"maxWidth": 640}), [])
        self.assertEqual(self.store.values()["maxWidth"], 640)

    def test_non_integer_dimension_falls_back_to_default(self) -> None:
        """A corrupt stored dimension should be logged and replaced by the default."""

        ModuleSetting.objects.create(module=OWNER, key="maxHeight", value="tall")
        with self.assertLogs("apps.videomarkup.services.settings_store", level="WARNING"):
            values = self.store.values()
        self.assertEqual(values["maxHeight"], 720)

    def test_modules_are_isolated(self) -> None:
        """Settings saved for another module should not leak into this one."""

        ModuleSettingsStore("OtherModule").save({"maxWidth": 10})
        self.assertEqual(self.store.values()["maxWidth"], 1280)

    def test_database_error_raises_settings_store_error(self) -> None:
        """Database failures during save should surface as `SettingsStoreError`."""

        with patch.object(
            ModuleSetting.objects, "update_or_create", side_effect=DatabaseError("boom")
        ):
            with self.assertLogs("apps.videomarkup.services.settings_store", level="ERROR"):
                with self.assertRaises(SettingsStoreError):
                    self.store.save({"maxWidth": 1})


class CacheStoreTests(TestCase):
    """Tests for prefix counting and clearing of cache rows."""

    def setUp(self) -> None:
        CacheEntry.objects.create(name=f"{OWNER}__a", data="<iframe></iframe>")
        CacheEntry.objects.create(name=f"{OWNER}__b", data="<iframe></iframe>")
        CacheEntry.objects.create(name="OtherModule__c", data="x")
        self.store = CacheStore(OWNER)

    def test_count_by_prefix_counts_only_matching_rows(self) -> None:
        """Only rows named with the owner prefix should be counted."""

        self.assertEqual(self.store.count_by_prefix(f"{OWNER}__"), 2)
        self.assertEqual(self.store.count(), 2)

    def test_clear_for_removes_only_owner_rows(self) -> None:
        """Clearing should delete the owner's rows and keep other owners' rows."""

        with self.assertLogs("apps.videomarkup.services.cache_store", level="INFO"):
            self.store.clear_for(OWNER)
        self.assertEqual(
            list(CacheEntry.objects.values_list("name", flat=True)), ["OtherModule__c"]
        )

    def test_get_skips_expired_entries(self) -> None:
        """Expired rows should read as missing; live rows return their data."""

        self.store.set("old", "stale", expires=timezone.now() - timedelta(minutes=1))
        self.store.set("new", "fresh", expires=timezone.now() + timedelta(days=1))
        self.assertIsNone(self.store.get("old"))
        self.assertEqual(self.store.get("new"), "fresh")
        self.assertEqual(self.store.get("a"), "<iframe></iframe>")

    def test_database_error_raises_cache_store_error(self) -> None:
        """Database failures while counting should surface as `CacheStoreError`."""

        with patch.object(CacheEntry.objects, "filter", side_effect=DatabaseError("boom")):
            with self.assertLogs("apps.videomarkup.services.cache_store", level="ERROR"):
                with self.assertRaises(CacheStoreError):
                    self.store.count()


class EditorAttrsTests(SimpleTestCase):
    """Tests for code editor attribute resolution."""

    @override_settings(VIDEO_MARKUP_EDITOR={"aceTheme": "chrome"})
    def test_settings_override_defaults(self) -> None:
        """Configured values win over defaults; missing keys use the defaults."""

        attrs = editor_attrs()
        self.assertEqual(attrs["data-theme"], "chrome")
        self.assertEqual(attrs["data-height"], 25)
        self.assertEqual(attrs["data-behaviors"], 1)

    @override_settings(VIDEO_MARKUP_EDITOR={"aceTheme": "chrome", "aceBehaviors": "1"})
    def test_session_overrides_settings(self) -> None:
        """Session values win over configured values."""

        attrs = editor_attrs({"videomarkup_editor_aceTheme": "twilight"})
        self.assertEqual(attrs["data-theme"], "twilight")
        self.assertEqual(attrs["data-behaviors"], 1)

    def test_non_numeric_behaviors_fall_back_to_default(self) -> None:
        """A non-numeric behaviors value should not break rendering."""

        attrs = editor_attrs({"videomarkup_editor_aceBehaviors": "on"})
        self.assertEqual(attrs["data-behaviors"], 1)

    @override_settings(VIDEO_MARKUP_EDITOR=None)
    def test_disabled_editor_has_no_attrs(self) -> None:
        """A disabled editor yields no attributes, whatever the session holds."""

        self.assertEqual(editor_attrs({"videomarkup_editor_aceTheme": "twilight"}), {})


class LayoutTests(SimpleTestCase):
    """Tests for the assembled configuration layout."""

    def test_fieldset_order(self) -> None:
        """Fieldsets follow the markup, video, YouTube, Vimeo order."""

        self.assertEqual(
            [str(fieldset.label) for fieldset in build_inputfields()],
            ["", "Video Options", "YouTube Options", "Vimeo Options"],
        )

    def test_provider_fieldsets_are_collapsed_with_docs_link(self) -> None:
        """Provider fieldsets start collapsed and link their parameter docs."""

        youtube = build_inputfields()[2]
        self.assertEqual(youtube.collapsed, 1)
        self.assertIn("developers.google.com/youtube", str(youtube.notes))

    def test_cache_block_hidden_without_entries(self) -> None:
        """No cache block is built when nothing is cached."""

        names = [spec.name for spec in iter_fields(build_inputfields(cache_count=0))]
        self.assertNotIn("cache", names)

    def test_cache_block_present_with_entries(self) -> None:
        """A cache block with the count and clear button is built for cached rows."""

        cache = build_inputfields(cache_count=3)[-1].fields[0]
        self.assertEqual(cache.type, "markup")
        self.assertEqual(cache.description, "There are 3 cached videos.")
        self.assertIn('name="clearCache"', cache.value)

    def test_cache_message_is_pluralized(self) -> None:
        """The cache message uses singular and plural forms."""

        self.assertEqual(cache_status_message(1), "There is 1 cached video.")
        self.assertEqual(cache_status_message(2), "There are 2 cached videos.")

    def test_markup_template_carries_editor_attrs(self) -> None:
        """The markup template textarea carries its id and the editor attributes."""

        markup = build_inputfields(editor_attrs={"data-theme": "chrome"})[0].fields[0]
        self.assertEqual(markup.name, "markupTpl")
        self.assertEqual(markup.rows, 10)
        self.assertEqual(markup.attrs, {"id": "hc_code", "data-theme": "chrome"})


class VideoMarkupConfigFormTests(TestCase):
    """Tests for the dynamic configuration form."""

    def setUp(self) -> None:
        self.store = ModuleSettingsStore(OWNER)

    def test_form_contains_compiled_fields(self) -> None:
        """Every input spec becomes a form field; markup blocks do not."""

        form = VideoMarkupConfigForm(store=self.store)
        for name in ("markupTpl", "maxWidth", "maxHeight", "emptyValue", "yt_autoplay", "vm_color"):
            self.assertIn(name, form.fields)
        self.assertNotIn("cache", form.fields)
        self.assertEqual(form.initial["maxWidth"], 1280)

    def test_valid_submission_is_saved(self) -> None:
        """Submitted values are stored and blank fields stay unset."""

        form = VideoMarkupConfigForm(
            {
                "maxWidth": "800",
                "maxHeight": "450",
                "yt_autoplay": "0",
                "yt_color": "white",
                "vm_color": "ff0000",
            },
            store=self.store,
        )
        self.assertTrue(form.is_valid(), form.errors)
        form.save()
        self.assertEqual(
            self.store.load(),
            {
                "maxWidth": "800",
                "maxHeight": "450",
                "yt_autoplay": "0",
                "yt_color": "white",
                "vm_color": "ff0000",
            },
        )

    def test_unknown_choice_is_rejected(self) -> None:
        """Values outside a select's options are rejected."""

        form = VideoMarkupConfigForm({"yt_color": "blue"}, store=self.store)
        self.assertFalse(form.is_valid())
        self.assertIn("yt_color", form.errors)

    def test_negative_dimension_is_rejected(self) -> None:
        """Dimensions below zero are rejected."""

        form = VideoMarkupConfigForm({"maxWidth": "-5"}, store=self.store)
        self.assertFalse(form.is_valid())
        self.assertIn("maxWidth", form.errors)

    def test_clearing_a_toggle_removes_it(self) -> None:
        """Submitting an empty toggle removes the stored value."""

        self.store.save({"yt_autoplay": "1"})
        form = VideoMarkupConfigForm({"yt_autoplay": ""}, store=self.store)
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.save(), ["yt_autoplay"])
        self.assertNotIn("yt_autoplay", self.store.load())

    def test_sections_pair_specs_with_bound_fields(self) -> None:
        """Sections pair each spec with its bound field, or None for markup."""

        form = VideoMarkupConfigForm(store=self.store, cache_count=1)
        last_row = form.sections[-1].rows[0]
        self.assertEqual(last_row.spec.name, "cache")
        self.assertIsNone(last_row.field)
        self.assertEqual(form.sections[1].rows[0].field.name, "maxWidth")


@override_settings(VIDEO_MARKUP_MODULE=OWNER, VIDEO_MARKUP_CACHE_OWNER=OWNER)
class ModuleConfigViewTests(TestCase):
    """Tests for the configuration page, save flow and clear cache action."""

    def setUp(self) -> None:
        self.user = get_user_model().objects.create_user(
            username="editor", password="pass-12345", is_staff=True
        )
        self.client.force_login(self.user)
        self.url = reverse("apps.videomarkup:config")

    def _cache_rows(self, count: int) -> None:
        for index in range(count):
            CacheEntry.objects.create(name=f"{OWNER}__video{index}", data="<iframe>")

    def test_requires_staff_user(self) -> None:
        """Anonymous users are sent to the admin login."""

        self.client.logout()
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("admin:login"), response["Location"])

    def test_get_renders_provider_fieldsets(self) -> None:
        """The page renders provider fieldsets and hides the empty cache block."""

        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "YouTube Options")
        self.assertContains(response, "Vimeo Options")
        self.assertContains(response, 'name="yt_autoplay"')
        self.assertContains(response, 'data-theme="monokai"')
        self.assertNotContains(response, 'name="clearCache"')

    def test_get_shows_pluralized_cache_count(self) -> None:
        """Several cached rows show the plural message and the clear button."""

        self._cache_rows(2)
        response = self.client.get(self.url)
        self.assertContains(response, "There are 2 cached videos.")
        self.assertContains(response, 'name="clearCache"')

    def test_get_shows_singular_cache_count(self) -> None:
        """A single cached row shows the singular message."""

        self._cache_rows(1)
        response = self.client.get(self.url)
        self.assertContains(response, "There is 1 cached video.")

    def test_get_survives_non_numeric_editor_session_value(self) -> None:
        """A bad editor value in the session still renders the page."""

        session = self.client.session
        session["videomarkup_editor_aceBehaviors"] = "on"
        session.save()
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'data-behaviors="1"')

    def test_clear_cache_redirects_and_keeps_other_owners(self) -> None:
        """Clearing deletes only this owner's rows and confirms with a message."""

        self._cache_rows(2)
        CacheEntry.objects.create(name="OtherModule__x", data="x")

        response = self.client.post(self.url, {"clearCache": "1"}, follow=True)
        self.assertRedirects(response, self.url)
        self.assertContains(response, "Cache cleared")
        self.assertNotContains(response, 'name="clearCache"')
        self.assertFalse(CacheEntry.objects.filter(name__startswith=f"{OWNER}__").exists())
        self.assertTrue(CacheEntry.objects.filter(name="OtherModule__x").exists())

    def test_clear_cache_keeps_query_string(self) -> None:
        """The redirect after clearing keeps the query string."""

        response = self.client.post(f"{self.url}?tab=youtube", {"clearCache": "1"})
        self.assertRedirects(response, f"{self.url}?tab=youtube")

    def test_clear_cache_htmx_returns_hx_redirect(self) -> None:
        """HTMX requests get an `HX-Redirect` header instead of a 302."""

        self._cache_rows(1)
        response = self.client.post(
            self.url, {"clearCache": "1"}, HTTP_HX_REQUEST="true"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get("HX-Redirect"), self.url)
        self.assertEqual(CacheEntry.objects.count(), 0)

    def test_clear_cache_does_not_save_settings(self) -> None:
        """A clear cache submit skips saving the form values."""

        self.client.post(self.url, {"clearCache": "1", "maxWidth": "10"})
        self.assertFalse(ModuleSetting.objects.exists())

    def test_post_saves_configuration(self) -> None:
        """A valid submit stores the settings and confirms with a message."""

        response = self.client.post(
            self.url, {"maxWidth": "640", "maxHeight": "360", "yt_autoplay": "1"}, follow=True
        )
        self.assertRedirects(response, self.url)
        self.assertContains(response, "Configuration saved")
        store = ModuleSettingsStore(OWNER)
        self.assertEqual(store.values()["maxWidth"], 640)
        self.assertEqual(store.toggle("yt_autoplay"), Toggle.ENABLED)

    def test_post_without_changes_reports_it(self) -> None:
        """A submit that changes nothing says so."""

        response = self.client.post(self.url, {"save": "1"}, follow=True)
        self.assertContains(response, "No changes detected.")

    def test_invalid_post_rerenders_form(self) -> None:
        """An invalid submit renders the form again without saving."""

        response = self.client.post(self.url, {"maxWidth": "-5"})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(ModuleSetting.objects.exists())

    def test_cache_store_error_is_reported(self) -> None:
        """A cache read failure is shown as a message instead of a 500."""

        with patch(
            "apps.videomarkup.views.CacheStore.count",
            side_effect=CacheStoreError("Unable to read the cache table"),
        ):
            response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Unable to read the cache table")

    def test_settings_store_error_is_reported(self) -> None:
        """A settings save failure is shown as a message instead of a 500."""

        with patch(
            "apps.videomarkup.forms.ModuleSettingsStore.save",
            side_effect=SettingsStoreError("Unable to save settings"),
        ):
            response = self.client.post(self.url, {"maxWidth": "640"})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Unable to save settings")


class InlineMarkdownTests(SimpleTestCase):
    """Tests for the description and notes markdown subset."""

    def test_links_are_rendered(self) -> None:
        """`[text](url)` becomes an anchor opening in a new tab."""

        html = render_inline_markdown("See [docs](https://developer.vimeo.com/api#table-2).")
        self.assertIn(
            '<a href="https://developer.vimeo.com/api#table-2" target="_blank" rel="noopener">docs</a>',
            html,
        )

    def test_html_is_escaped(self) -> None:
        """Raw HTML is escaped."""

        self.assertEqual(render_inline_markdown("<b>x</b>"), "&lt;b&gt;x&lt;/b&gt;")

    def test_code_emphasis_and_line_breaks(self) -> None:
        """Backticks, asterisks and newlines map to code, em and br."""

        html = render_inline_markdown("Set `cc_load_policy`\nsuch as *Oops*")
        self.assertEqual(html, "Set <code>cc_load_policy</code><br>such as <em>Oops</em>")

    def test_none_renders_empty(self) -> None:
        """None renders as an empty string."""

        self.assertEqual(render_inline_markdown(None), "")

    def test_strip_namespace(self) -> None:
        """Only a matching namespace prefix is removed."""

        self.assertEqual(strip_namespace("yt_cc_lang_pref", "yt"), "cc_lang_pref")
        self.assertEqual(strip_namespace("maxWidth", "yt"), "maxWidth")
