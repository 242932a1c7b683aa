"""
Tests for the bbPress Notices plugin, run against a booted host context and the test database.
"""

import pytest
from markupsafe import Markup

from forum_notices.crud.posts import create_post, get_post_meta, has_post_meta, trash_post, update_post_meta
from forum_notices.host.context import build_host_context
from forum_notices.host.forum import FORUM_POST_TYPE
from forum_notices.host.hooks import HostEvent
from forum_notices.host.plugin_loader import boot_host
from forum_notices.models.posts import PostStatus
from forum_notices.plugins.bbpress_notices import (
    NOTICE_POST_TYPE,
    NOTICE_TYPE_FIELD,
    NOTICE_TYPE_META_KEY,
    load_notices_plugin,
)
from forum_notices.plugins.bbpress_notices.plugin import PLUGIN_NAME, TEXT_DOMAIN
from forum_notices.schemas.posts import PostQuery
from tests.helpers.catalogs import write_mo_file


def _create_notice(db, content="Maintenance tonight", status=PostStatus.PUBLISH, notice_type=None):
    notice = create_post(db=db, post_type=NOTICE_POST_TYPE, title="Notice", content=content, status=status)
    if notice_type is not None:
        update_post_meta(db=db, post_id=notice.id, meta_key=NOTICE_TYPE_META_KEY, meta_value=notice_type)
    return notice


### setup ###


def test_plugin_is_set_up_once(host, notices_plugin):
    assert load_notices_plugin(host) is notices_plugin

    callbacks = host.hooks.callbacks(HostEvent.SAVE_POST)
    assert callbacks.count(notices_plugin.persist_type) == 1


def test_plugin_set_up_late_on_plugins_loaded(test_settings):
    context = build_host_context(test_settings)
    setup_order = []
    context.hooks.add_action(HostEvent.PLUGINS_LOADED, lambda ctx: setup_order.append(PLUGIN_NAME in ctx.plugins))

    boot_host(context)

    assert setup_order == [False]
    assert PLUGIN_NAME in context.plugins


def test_render_hooks_are_registered(host, notices_plugin):
    for event in [HostEvent.BEFORE_FORUMS_INDEX, HostEvent.BEFORE_SINGLE_FORUM, HostEvent.BEFORE_SINGLE_TOPIC]:
        assert host.hooks.has_hook(event, notices_plugin.render_notices)


### register_type ###


def test_notice_type_is_registered(host):
    content_type = host.content_types.get(NOTICE_POST_TYPE)

    assert content_type is not None
    args = content_type.args
    assert args.public is False
    assert args.show_ui is True
    assert args.show_in_menu == FORUM_POST_TYPE
    assert args.query_var is False
    assert args.rewrite is False
    assert args.can_export is False
    assert args.capability_type == ("forum", "forums")
    assert args.capabilities == host.forum.get_forum_caps()
    assert args.supports == ["editor", "title"]


def test_notice_type_labels(host):
    labels = host.content_types.get(NOTICE_POST_TYPE).labels

    assert labels.name == "Notices"
    assert labels.singular_name == "Notice"
    assert labels.add_new_item == "Add New Notice"
    assert labels.edit_item == "Edit Notice"
    assert labels.not_found_in_trash == "No Notices found in Trash"
    assert labels.parent_item_colon == ""
    assert labels.menu_name == "Notices"


def test_notices_are_in_the_forum_submenu(host):
    submenu = host.content_types.submenu(FORUM_POST_TYPE)

    assert NOTICE_POST_TYPE in [content_type.name for content_type in submenu]
    assert NOTICE_POST_TYPE not in [content_type.name for content_type in host.content_types.top_level_menu()]


def test_register_type_twice(host, notices_plugin):
    content_type = host.content_types.get(NOTICE_POST_TYPE)

    notices_plugin.register_type()

    assert host.content_types.get(NOTICE_POST_TYPE) is content_type


def test_no_notice_type_without_forum(host_without_forum):
    assert PLUGIN_NAME in host_without_forum.plugins
    assert not host_without_forum.content_types.exists(NOTICE_POST_TYPE)


### save_messages ###


def test_save_messages(notices_plugin):
    messages = {"post": {1: "Post updated."}}

    result = notices_plugin.save_messages(messages)

    assert result["post"] == {1: "Post updated."}
    assert result[NOTICE_POST_TYPE] == {
        1: "Notice updated.",
        4: "Notice updated.",
        6: "Notice published.",
        7: "Notice saved.",
        8: "Notice submitted.",
    }
    assert messages == {"post": {1: "Post updated."}}


def test_save_messages_replaces_existing_notice_messages(notices_plugin):
    result = notices_plugin.save_messages({NOTICE_POST_TYPE: {2: "Custom field updated."}})

    assert 2 not in result[NOTICE_POST_TYPE]


def test_save_messages_through_the_filter(host):
    messages = host.hooks.apply_filters(HostEvent.POST_UPDATED_MESSAGES, {})

    assert messages[NOTICE_POST_TYPE][6] == "Notice published."


### render_type_control ###


def test_type_control_for_notice(db_session, notices_plugin):
    notice = _create_notice(db_session)

    output = notices_plugin.render_type_control(db_session, notice)

    assert isinstance(output, Markup)
    assert f'<div id="{NOTICE_TYPE_FIELD}_wrap">' in output
    assert f'<label for="{NOTICE_TYPE_FIELD}">Type:</label>' in output
    assert f'<select name="{NOTICE_TYPE_FIELD}" id="{NOTICE_TYPE_FIELD}">' in output
    assert '<option value="0">Default</option>' in output
    assert '<option value="info">Info</option>' in output
    assert '<option value="error">Error</option>' in output
    assert "selected" not in output.replace("<select", "")


@pytest.mark.parametrize("notice_type, label", [("info", "Info"), ("error", "Error")])
def test_type_control_selects_stored_type(db_session, notices_plugin, notice_type, label):
    notice = _create_notice(db_session, notice_type=notice_type)

    output = notices_plugin.render_type_control(db_session, notice)

    assert f'<option value="{notice_type}" selected="selected">{label}</option>' in output
    assert output.count('selected="selected"') == 1


def test_type_control_options_in_order(db_session, notices_plugin):
    output = notices_plugin.render_type_control(db_session, _create_notice(db_session))

    assert output.index('value="0"') < output.index('value="info"') < output.index('value="error"')


def test_no_type_control_for_other_content(db_session, notices_plugin):
    post = create_post(db=db_session, post_type="post")

    assert notices_plugin.render_type_control(db_session, post) is None
    assert notices_plugin.render_type_control(db_session, None) is None


def test_type_control_through_the_hook(db_session, host):
    notice = _create_notice(db_session)
    post = create_post(db=db_session, post_type="post")

    assert NOTICE_TYPE_FIELD in host.hooks.render(HostEvent.POST_SUBMITBOX_START, db_session, notice)
    assert host.hooks.render(HostEvent.POST_SUBMITBOX_START, db_session, post) == ""


### persist_type ###


@pytest.mark.parametrize("notice_type", ["info", "error", "custom-type"])
def test_persist_type_stores_value(db_session, notices_plugin, notice_type):
    notice = _create_notice(db_session)

    notices_plugin.persist_type(db_session, notice.id, {NOTICE_TYPE_FIELD: notice_type})

    assert get_post_meta(db=db_session, post_id=notice.id, meta_key=NOTICE_TYPE_META_KEY) == notice_type


def test_persist_type_overwrites_value(db_session, notices_plugin):
    notice = _create_notice(db_session, notice_type="info")

    notices_plugin.persist_type(db_session, notice.id, {NOTICE_TYPE_FIELD: "error"})

    assert get_post_meta(db=db_session, post_id=notice.id, meta_key=NOTICE_TYPE_META_KEY) == "error"


@pytest.mark.parametrize("form", [{NOTICE_TYPE_FIELD: "0"}, {NOTICE_TYPE_FIELD: ""}, {}])
def test_persist_empty_type_removes_value(db_session, notices_plugin, form):
    notice = _create_notice(db_session, notice_type="error")

    notices_plugin.persist_type(db_session, notice.id, form)

    assert not has_post_meta(db=db_session, post_id=notice.id, meta_key=NOTICE_TYPE_META_KEY)


def test_persist_type_ignores_other_content(db_session, notices_plugin):
    post = create_post(db=db_session, post_type="post")

    notices_plugin.persist_type(db_session, post.id, {NOTICE_TYPE_FIELD: "info"})

    assert not has_post_meta(db=db_session, post_id=post.id, meta_key=NOTICE_TYPE_META_KEY)


def test_persist_type_ignores_missing_post(db_session, notices_plugin):
    notices_plugin.persist_type(db_session, 404, {NOTICE_TYPE_FIELD: "info"})


def test_persist_type_through_save_post(db_session, host):
    notice = _create_notice(db_session)

    host.hooks.do_action(HostEvent.SAVE_POST, db_session, notice.id, {NOTICE_TYPE_FIELD: "info"})

    assert get_post_meta(db=db_session, post_id=notice.id, meta_key=NOTICE_TYPE_META_KEY) == "info"


### render_notices ###


def test_no_notices(db_session, notices_plugin):
    assert notices_plugin.render_notices(db_session) is None


def test_default_notice(db_session, notices_plugin):
    _create_notice(db_session, content="Hello")

    output = notices_plugin.render_notices(db_session)

    assert output == "<div class='bbp-template-notice '><p>Hello</p>\n</div>"


def test_notice_with_type(db_session, notices_plugin):
    _create_notice(db_session, content="Hello\n\nWorld", notice_type="info")

    output = notices_plugin.render_notices(db_session)

    assert output == "<div class='bbp-template-notice info'><p>Hello</p>\n<p>World</p>\n</div>"


def test_notice_html_content_is_kept(db_session, notices_plugin):
    _create_notice(db_session, content="Read the <a href='/rules'>rules</a>")

    output = notices_plugin.render_notices(db_session)

    assert "<a href='/rules'>rules</a>" in output


def test_notices_newest_first(db_session, notices_plugin):
    _create_notice(db_session, content="First", notice_type="info")
    _create_notice(db_session, content="Second", notice_type="error")

    output = notices_plugin.render_notices(db_session)

    assert output == (
        "<div class='bbp-template-notice error'><p>Second</p>\n</div>"
        "<div class='bbp-template-notice info'><p>First</p>\n</div>"
    )


@pytest.mark.parametrize("status", [PostStatus.DRAFT, PostStatus.PENDING, PostStatus.AUTO_DRAFT])
def test_unpublished_notices_are_not_shown(db_session, notices_plugin, status):
    _create_notice(db_session, status=status)

    assert notices_plugin.render_notices(db_session) is None


def test_trashed_notices_are_not_shown(db_session, notices_plugin):
    notice = _create_notice(db_session)
    trash_post(db=db_session, post=notice)

    assert notices_plugin.render_notices(db_session) is None


def test_other_content_is_not_shown(db_session, notices_plugin):
    create_post(db=db_session, post_type="post", content="Not a notice", status=PostStatus.PUBLISH)

    assert notices_plugin.render_notices(db_session) is None


def test_all_notices_are_shown(db_session, notices_plugin):
    for i in range(8):
        _create_notice(db_session, content=f"Notice {i}")

    output = notices_plugin.render_notices(db_session)

    assert output.count("bbp-template-notice") == 8


def test_notices_query_filter(db_session, host, notices_plugin):
    _create_notice(db_session, content="First")
    _create_notice(db_session, content="Second")

    def oldest_only(query: PostQuery) -> PostQuery:
        return query.model_copy(update={"order": "ASC", "nopaging": False, "posts_per_page": 1})

    host.hooks.add_filter(HostEvent.NOTICES_QUERY_ARGS, oldest_only)

    output = notices_plugin.render_notices(db_session)

    assert "First" in output
    assert "Second" not in output


@pytest.mark.parametrize(
    "event", [HostEvent.BEFORE_FORUMS_INDEX, HostEvent.BEFORE_SINGLE_FORUM, HostEvent.BEFORE_SINGLE_TOPIC]
)
def test_notices_rendered_on_forum_pages(db_session, host, event):
    _create_notice(db_session, content="Hello", notice_type="error")

    assert host.hooks.render(event, db_session) == "<div class='bbp-template-notice error'><p>Hello</p>\n</div>"


def test_notice_type_is_escaped(db_session, notices_plugin):
    _create_notice(db_session, content="Hello", notice_type="info' onclick='alert(1)")

    output = notices_plugin.render_notices(db_session)

    assert "onclick='alert" not in output
    assert "info&#39; onclick=&#39;alert(1)" in output


### load_textdomain ###


@pytest.fixture
def swedish_settings(test_settings):
    test_settings.i18n.locale = "sv_SE"
    return test_settings


def _boot_with_languages_dir(settings, languages_dir):
    context = build_host_context(settings)
    context.hooks.add_filter(HostEvent.NOTICES_LANGUAGES, lambda _: languages_dir)
    boot_host(context)
    return context


def test_no_catalog_for_locale(swedish_settings, tmp_path):
    context = _boot_with_languages_dir(swedish_settings, tmp_path)

    assert context.text_domains.is_loaded(TEXT_DOMAIN)
    assert context.content_types.get(NOTICE_POST_TYPE).labels.name == "Notices"


def test_local_catalog(swedish_settings, tmp_path):
    write_mo_file(
        tmp_path / f"{TEXT_DOMAIN}-sv_SE.mo",
        translations={"Edit Notice": "Redigera meddelande"},
        contexts={("post type general name", "Notices"): "Meddelanden"},
    )

    context = _boot_with_languages_dir(swedish_settings, tmp_path)

    labels = context.content_types.get(NOTICE_POST_TYPE).labels
    assert labels.name == "Meddelanden"
    assert labels.edit_item == "Redigera meddelande"
    assert labels.new_item == "New Notice"


def test_global_catalog_is_preferred(swedish_settings, tmp_path):
    local_dir = tmp_path / "local"
    global_dir = tmp_path / "global"
    write_mo_file(local_dir / f"{TEXT_DOMAIN}-sv_SE.mo", translations={"Edit Notice": "local"})
    write_mo_file(global_dir / TEXT_DOMAIN / f"{TEXT_DOMAIN}-sv_SE.mo", translations={"Edit Notice": "global"})
    swedish_settings.i18n.languages_dir = str(global_dir)

    context = _boot_with_languages_dir(swedish_settings, local_dir)

    assert context.content_types.get(NOTICE_POST_TYPE).labels.edit_item == "global"


def test_default_catalog_layout(swedish_settings, tmp_path):
    write_mo_file(tmp_path / "sv_SE" / "LC_MESSAGES" / f"{TEXT_DOMAIN}.mo", translations={"Edit Notice": "default"})

    context = _boot_with_languages_dir(swedish_settings, tmp_path)

    assert context.content_types.get(NOTICE_POST_TYPE).labels.edit_item == "default"


def test_locale_filter(test_settings, tmp_path):
    write_mo_file(tmp_path / f"{TEXT_DOMAIN}-de_DE.mo", translations={"Notice saved.": "Hinweis gespeichert."})
    context = build_host_context(test_settings)
    context.hooks.add_filter(HostEvent.NOTICES_LANGUAGES, lambda _: tmp_path)
    context.hooks.add_filter(
        HostEvent.PLUGIN_LOCALE, lambda locale, domain: "de_DE" if domain == TEXT_DOMAIN else locale
    )

    boot_host(context)

    messages = context.hooks.apply_filters(HostEvent.POST_UPDATED_MESSAGES, {})
    assert messages[NOTICE_POST_TYPE][7] == "Hinweis gespeichert."


def test_type_control_is_translated(db_session, swedish_settings, tmp_path):
    write_mo_file(tmp_path / f"{TEXT_DOMAIN}-sv_SE.mo", translations={"Type:": "Typ:", "Default": "Standard"})
    context = _boot_with_languages_dir(swedish_settings, tmp_path)
    notice = _create_notice(db_session)

    output = context.plugins[PLUGIN_NAME].render_type_control(db_session, notice)

    assert "Typ:" in output
    assert '<option value="0">Standard</option>' in output
