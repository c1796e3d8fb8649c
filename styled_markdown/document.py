"""Assembly of emitted blocks into a `Document`."""

from __future__ import annotations

from .models import (
    Block,
    BlockQuote,
    ContainerKind,
    Document,
    ListItem,
    Paragraph,
    TextRun,
)


class DocumentBuilder:
    """Collect blocks in source order.

    Inline runs are held in a pending group until a structural boundary
    closes it; the innermost open container decides which block the group
    becomes.

    Examples:
        builder = DocumentBuilder()
        builder.add_run(TextRun("hello"))
        builder.build()  # Document((Paragraph((TextRun("hello"),)),))
    """

    def __init__(self):
        self._blocks: list[Block] = []
        self._runs: list[TextRun] = []
        self._containers: list[ContainerKind] = []

    @property
    def container(self) -> ContainerKind:
        return self._containers[-1] if self._containers else ContainerKind.PARAGRAPH

    def add_run(self, run: TextRun) -> None:
        if run.text:
            self._runs.append(run)

    def add_block(self, block: Block) -> None:
        self.close_runs()
        self._blocks.append(block)

    def close_runs(self) -> None:
        """Turn the pending runs into a block; does nothing when none are pending."""
        if not self._runs:
            return

        runs = tuple(self._runs)
        self._runs.clear()

        container = self.container
        if container is ContainerKind.LIST_ITEM:
            block: Block = ListItem("".join(run.text for run in runs))
        elif container is ContainerKind.BLOCK_QUOTE:
            block = BlockQuote(runs)
        else:
            block = Paragraph(runs)
        self._blocks.append(block)

    def open_container(self, kind: ContainerKind) -> None:
        self._containers.append(kind)

    def close_container(self, kind: ContainerKind) -> None:
        # Unbalanced end events are ignored.
        if self._containers and self._containers[-1] is kind:
            self._containers.pop()

    def build(self) -> Document:
        self.close_runs()
        return Document(tuple(self._blocks))
