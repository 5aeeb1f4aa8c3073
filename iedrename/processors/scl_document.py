"""SCL document access: reading IED records and applying renames."""

from pathlib import Path
from xml.etree import ElementTree as ET

from rich.console import Console
from tqdm import tqdm

from iedrename.models.ied import IEDRecord
from iedrename.models.rename import RenameOp


console = Console()

# IED attribute name -> IEDRecord field
_RECORD_ATTRIBUTES = {
    "name": "name",
    "manufacturer": "manufacturer",
    "type": "type",
    "desc": "desc",
    "configVersion": "config_version",
    "originalSclVersion": "original_scl_version",
    "originalSclRevision": "original_scl_revision",
    "originalSclRelease": "original_scl_release",
}


def _local_name(tag: str) -> str:
    """Strip the namespace from an ElementTree tag."""
    return tag.rsplit("}", 1)[-1]


class SCLDocument:
    """An SCL file holding the IEDs to rename."""

    def __init__(self, tree: ET.ElementTree, path: Path | None = None) -> None:
        self.tree = tree
        self.path = path

    @classmethod
    def open(cls, path: str | Path) -> "SCLDocument":
        """Parse an SCL file.

        Namespace prefixes used in the file are registered so they survive saving.

        Raises:
            ValueError: If the file is not well-formed XML.
        """
        path = Path(path)
        try:
            for _, (prefix, uri) in ET.iterparse(path, events=("start-ns",)):
                ET.register_namespace(prefix, uri)
            tree = ET.parse(path)
        except ET.ParseError as e:
            raise ValueError(f"Could not parse SCL file '{path}': {e}") from e

        return cls(tree, path)

    @property
    def root(self) -> ET.Element:
        return self.tree.getroot()

    def _ied_elements(self) -> list[ET.Element]:
        return [child for child in self.root if _local_name(child.tag) == "IED"]

    def records(self) -> list[IEDRecord]:
        """Return one record per top-level IED, in document order."""
        records = []
        for ied in self._ied_elements():
            fields = {
                field: ied.get(attribute)
                for attribute, field in _RECORD_ATTRIBUTES.items()
                if ied.get(attribute) is not None
            }
            records.append(IEDRecord(**{"name": "", **fields}))
        return records

    def _references(self, name: str) -> list[tuple[ET.Element, str | None]]:
        """Find elements referring to IED `name`.

        Returns (element, attribute) pairs; attribute is None for `IEDName` text references.
        """
        references: list[tuple[ET.Element, str | None]] = []
        for element in self.root.iter():
            if _local_name(element.tag) == "IED":
                continue
            if element.get("iedName") == name:
                references.append((element, "iedName"))
            if _local_name(element.tag) == "IEDName" and (element.text or "").strip() == name:
                references.append((element, None))
        return references

    def apply_renames(self, ops: list[RenameOp]) -> int:
        """Rename IEDs and update every reference to them.

        All targets are resolved before anything is modified, so swapping names
        between IEDs works.

        Args:
            ops: Rename operations to apply.

        Returns:
            Number of references updated, not counting the IED elements themselves.

        Raises:
            ValueError: If an operation names an IED that is not in the document.
        """
        ieds = {ied.get("name"): ied for ied in self._ied_elements()}

        # First resolve all operations
        resolved = []
        for op in ops:
            if op.old_name not in ieds:
                raise ValueError(f"IED '{op.old_name}' not found in document.")
            resolved.append((op, ieds[op.old_name], self._references(op.old_name)))

        updated = 0
        for op, ied, references in tqdm(resolved, desc="Renaming IEDs...", total=len(resolved)):
            ied.set("name", op.new_name)
            for element, attribute in references:
                if attribute is None:
                    element.text = op.new_name
                else:
                    element.set(attribute, op.new_name)
                updated += 1

        console.print(f"[cyan]Renamed {len(resolved)} IED(s) and updated {updated} reference(s).[/cyan]")
        return updated

    def save(self, path: str | Path) -> None:
        """Write the document as UTF-8 XML."""
        self.tree.write(path, encoding="utf-8", xml_declaration=True)
