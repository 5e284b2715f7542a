"""Tests for event extraction."""

from __future__ import annotations

from vuedoc.parser import EntryKind


def _events(channel) -> dict:
    return {entry.name: entry for entry in channel.entries_of(EntryKind.EVENT)}


def test_emit_calls_resolve_names_through_scope(extract_script) -> None:
    channel = extract_script(
        """
        const EVENTS = { CLOSE: 'close' }

        export default {
          methods: {
            close(force) {
              /**
               * Emitted when the dialog closes
               * @arg {boolean} forced - Whether it was forced
               */
              this.$emit(EVENTS.CLOSE, true)
            },
            open() {
              const name = 'open'
              this.$emit(name, { id: 1 }, [1], ...extra)
            },
          }
        }
        """
    )

    events = _events(channel)
    assert list(events) == ["close", "open"]

    close = events["close"]
    assert close.description == "Emitted when the dialog closes"
    (argument,) = close.arguments
    assert (argument.name, argument.type, argument.description) == (
        "true",
        "boolean",
        "Whether it was forced",
    )

    payload, items, rest = events["open"].arguments
    assert (payload.name, payload.type) == ("{ id: 1 }", "object")
    assert (items.name, items.type) == ("[1]", "array")
    assert (rest.name, rest.rest, rest.declaration) == ("extra", True, "...extra")


def test_duplicate_events_keep_the_first_emission(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          created() {
            /** First */
            this.$emit('input', 1)
          },
          watch: {
            value(next) {
              /** Second */
              this.$emit('input', next)
            },
          },
        }
        """
    )

    (entry,) = channel.entries_of(EntryKind.EVENT)
    assert entry.description == "First"
    assert entry.arguments[0].type == "number"


def test_unresolved_event_names_are_diagnostics(extract_script) -> None:
    channel = extract_script(
        """
        const EVENTS = { CLOSE: 'close' }

        export default {
          mounted() {
            this.$emit(EVENTS.UNKNOWN)
            this.$emit()
            /** @event named */
            this.$emit(dynamic)
          }
        }
        """
    )

    assert [entry.name for entry in channel.entries] == ["named"]
    (diagnostic,) = channel.diagnostics
    assert diagnostic.message == "Missing keyword value for @event"
    assert diagnostic.kind is EntryKind.EVENT
    assert diagnostic.line == 6


def test_emit_primitives_cover_setup_context(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          setup(props, { emit }) {
            const submit = () => emit('submit', props.value)
            return { submit }
          }
        }
        """
    )

    (entry,) = channel.entries_of(EntryKind.EVENT)
    assert entry.name == "submit"
    assert entry.arguments[0].name == "props.value"
    assert entry.arguments[0].type == "any"


def test_custom_emit_primitive(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          mounted() {
            this.fire('ready')
            this.$emit('ignored')
          }
        }
        """,
        emitPrimitives=["fire"],
    )

    assert [entry.name for entry in channel.entries] == ["ready"]


def test_emits_option_declares_events(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          emits: {
            /** Form submitted */
            submit: (payload, ...rest) => true,
            cancel: null,
            broken: 42,
          },
          methods: {
            save() { this.$emit('submit', 1) }
          }
        }
        """
    )

    events = _events(channel)
    assert list(events) == ["submit", "cancel", "broken"]
    assert events["submit"].description == "Form submitted"
    assert [(item.name, item.rest) for item in events["submit"].arguments] == [
        ("payload", False),
        ("rest", True),
    ]
    assert events["cancel"].arguments == []
    (diagnostic,) = channel.diagnostics
    assert diagnostic.message == "Invalid validator for event 'broken'"


def test_emits_array_form(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          emits: ['open', 'close', 3],
        }
        """
    )

    assert [entry.name for entry in channel.entries] == ["open", "close"]
    assert [item.message for item in channel.diagnostics] == [
        "Invalid event declaration"
    ]
