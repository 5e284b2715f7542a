"""Tests for slot extraction from markup and scripts."""

from __future__ import annotations

from vuedoc.parser import EntryKind


def _slots(channel) -> dict:
    return {entry.name: entry for entry in channel.entries_of(EntryKind.SLOT)}


def test_markup_slots_are_flattened_in_document_order(extract_template) -> None:
    channel = extract_template(
        """
        <div class="card">
          <!-- The card header -->
          <slot name="header" :title="title" label="Card"></slot>
          <slot></slot>
          <footer>
            <slot name="footer">
              <slot name="actions" v-if="ready" @click="close"></slot>
            </slot>
          </footer>
          <span slot="header">Not a slot</span>
        </div>
        """
    )

    slots = _slots(channel)
    assert list(slots) == ["header", "default", "footer", "actions"]

    header = slots["header"]
    assert header.description == "The card header"
    assert [(prop.name, prop.type) for prop in header.props] == [
        ("title", "any"),
        ("label", "string"),
    ]
    assert slots["default"].props == []
    assert slots["actions"].props == []
    assert channel.diagnostics == ()


def test_slot_tags_expand_into_entries(extract_template) -> None:
    channel = extract_template(
        """
        <div>
          <!--
            Dynamic slot
            @slot title - The title
            @slot body - The body
            @prop {string} item - The current item
          -->
          <slot :name="current" :item="item"></slot>
          <slot name="title"></slot>
        </div>
        """
    )

    slots = _slots(channel)
    assert list(slots) == ["title", "body"]
    assert slots["title"].description == "The title"
    assert slots["body"].description == "The body"
    (prop,) = slots["body"].props
    assert (prop.name, prop.type, prop.description) == (
        "item",
        "string",
        "The current item",
    )


def test_script_slots_from_comment_and_render(extract_script) -> None:
    channel = extract_script(
        """
        /**
         * A card component
         * @slot header - The card header
         */
        export default {
          render(h) {
            return h('div', [
              this.$slots.header,
              this.$scopedSlots.body({ item: this.item }),
              this.$slots.body,
            ])
          },
        }
        """
    )

    slots = _slots(channel)
    assert list(slots) == ["header", "body"]
    assert slots["header"].description == "The card header"


def test_setup_slots_function_references(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          render() {
            const title = slots().title
            return title
          },
        }
        """
    )

    assert [entry.name for entry in channel.entries] == ["title"]
