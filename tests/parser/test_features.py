"""Tests for feature gating, determinism and the emission channel."""

from __future__ import annotations

import json

from vuedoc.parser import (
    DataEntry,
    Diagnostic,
    EmissionChannel,
    EntryKind,
    EventEntry,
    MethodEntry,
    MethodParam,
    PropEntry,
    Verbatim,
)

COMPONENT = """
    const EVENTS = { CLOSE: 'close' }

    /**
     * A dialog
     * @slot footer - Footer content
     */
    export default {
      props: { open: Boolean },
      data() {
        return { visible: false }
      },
      computed: {
        label() {
          this.$emit('labelled')
          return this.title
        },
      },
      methods: {
        /** Close it */
        close() {
          this.$emit(EVENTS.CLOSE)
          this.$emit(EVENTS.MISSING)
        },
      },
      model: { prop: 'open', event: 'toggle' },
      render() {
        return this.$slots.default
      },
    }
"""


def test_every_feature_enabled_by_default(extract_script) -> None:
    channel = extract_script(COMPONENT)

    kinds = {entry.kind for entry in channel.entries}
    assert kinds == set(EntryKind)
    assert len(channel.diagnostics) == 1


def test_disabled_features_are_not_traversed(extract_script) -> None:
    channel = extract_script(COMPONENT, features=["props", "data"])

    assert [(entry.kind, entry.name) for entry in channel.entries] == [
        (EntryKind.PROP, "open"),
        (EntryKind.DATA, "visible"),
    ]
    assert channel.diagnostics == ()


def test_disabled_host_kinds_are_not_scanned_for_events(extract_script) -> None:
    channel = extract_script(COMPONENT, features=["events"])

    assert channel.entries == ()
    assert channel.diagnostics == ()


def test_disabled_methods_hide_their_events(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          methods: {
            close() {
              this.$emit('close')
            },
          },
          mounted() {
            this.$emit('ready')
          },
        }
        """,
        features=["events"],
    )

    assert [entry.name for entry in channel.entries] == ["ready"]


def test_disabled_class_members_hide_their_events(extract_typescript) -> None:
    channel = extract_typescript(
        """
        export default class Toggle {
          get open(): boolean {
            this.$emit('read')
            return true
          }

          set open(value: boolean) {
            this.$emit('written', value)
          }

          toggle() {
            this.$emit('toggled')
          }

          mounted() {
            this.$emit('ready')
          }
        }
        """,
        features=["events"],
    )

    assert [entry.name for entry in channel.entries] == ["ready"]


def test_disabling_events_silences_their_diagnostics(extract_script) -> None:
    channel = extract_script(
        COMPONENT,
        features=["props", "data", "computed", "methods", "slots", "model"],
    )

    assert channel.entries_of(EntryKind.EVENT) == []
    assert channel.diagnostics == ()


def test_extraction_is_deterministic(extract_script) -> None:
    first = extract_script(COMPONENT)
    second = extract_script(COMPONENT)

    def dump(channel: EmissionChannel) -> str:
        return json.dumps(
            [
                entry.to_dict() if not isinstance(entry, Diagnostic) else str(entry)
                for entry in channel
            ],
            sort_keys=True,
        )

    assert dump(first) == dump(second)


def test_channel_unique_guard_and_listeners() -> None:
    channel = EmissionChannel()
    seen: list[str] = []
    channel.subscribe(lambda message: seen.append(type(message).__name__))

    assert channel.push_entry(EventEntry(name="close"), unique=True)
    assert not channel.push_entry(EventEntry(name="close"), unique=True)
    assert channel.push_entry(PropEntry(name="close"), unique=True)
    channel.push_diagnostic(Diagnostic("Invalid model declaration", line=3))

    assert seen == ["EventEntry", "PropEntry", "Diagnostic"]
    assert channel.has_entry(EntryKind.EVENT, "close")
    assert [entry.kind for entry in channel.entries] == [
        EntryKind.EVENT,
        EntryKind.PROP,
    ]
    assert str(channel.diagnostics[0]) == "Invalid model declaration (line 3)"


def test_entries_serialize_to_plain_data() -> None:
    payload = PropEntry(name="size", type=["Number", "String"]).to_dict()

    assert payload["kind"] == "prop"
    assert payload["type"] == ["Number", "String"]
    assert payload["visibility"] == "public"
    assert "default" not in payload
    json.dumps(payload)


def test_deeply_nested_expressions_are_walked(extract_script) -> None:
    terms = " + ".join(f"'p{index}'" for index in range(1500))
    total = " + ".join(["this.base"] + ["1"] * 1500)
    channel = extract_script(
        "export default {\n"
        f"  data() {{ return {{ label: {terms} }} }},\n"
        f"  computed: {{ total() {{ return {total} }} }},\n"
        "  mounted() { this.$emit('go') },\n"
        "}\n"
    )

    (data,) = channel.entries_of(EntryKind.DATA)
    assert data.initial_value == Verbatim(terms)
    (computed,) = channel.entries_of(EntryKind.COMPUTED)
    assert computed.dependencies == ["base"]
    assert [entry.name for entry in channel.entries_of(EntryKind.EVENT)] == ["go"]


def test_serialized_keys_use_camel_case() -> None:
    prop = PropEntry(name="checked", describe_model=True).to_dict()
    data = DataEntry(name="user_name", initial_value={"first_name": "Ada"}).to_dict()
    method = MethodEntry(
        name="add", params=[MethodParam(name="step", default_value="1")]
    ).to_dict()

    assert prop["describeModel"] is True
    assert "describe_model" not in prop
    assert data["name"] == "user_name"
    assert data["initialValue"] == {"first_name": "Ada"}
    assert method["params"][0]["defaultValue"] == "1"
    assert method["returns"] == {"type": "void", "description": ""}
