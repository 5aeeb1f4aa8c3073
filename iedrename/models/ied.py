"""IED record data model."""

from pydantic import BaseModel, Field


class IEDRecord(BaseModel):
    """A single IED as supplied by the source document.

    The descriptive fields mirror the attributes of an SCL `IED` element and are
    only used for display and searching, never for validation.
    """

    name: str = Field(description="Name of the IED, used as its identity within a rename session")
    manufacturer: str | None = Field(default=None, description="IED manufacturer")
    type: str | None = Field(default=None, description="IED type")
    desc: str | None = Field(default=None, description="Free-text description")
    config_version: str | None = Field(default=None, description="Configuration version")
    original_scl_version: str | None = Field(default=None, description="SCL schema version of the source file")
    original_scl_revision: str | None = Field(default=None, description="SCL schema revision of the source file")
    original_scl_release: str | None = Field(default=None, description="SCL schema release of the source file")

    def __str__(self) -> str:
        return f"IEDRecord('{self.name}', manufacturer={self.manufacturer!r}, type={self.type!r})"

    @property
    def first_line(self) -> str:
        """Manufacturer and type, e.g. `ABB - REL670`."""
        return " - ".join(value for value in (self.manufacturer, self.type) if value is not None)

    @property
    def schema_information(self) -> str:
        """Concatenated schema version, revision and release, e.g. `2007B4`."""
        parts = (self.original_scl_version, self.original_scl_revision, self.original_scl_release)
        return "".join(value for value in parts if value is not None)

    @property
    def second_line(self) -> str:
        """Description, configuration version and schema information."""
        # Schema information is always present, even when empty.
        parts = [value for value in (self.desc, self.config_version) if value is not None]
        parts.append(self.schema_information)
        return " - ".join(parts)

    @property
    def sort_key(self) -> str:
        """Key used by display surfaces to order IEDs."""
        return f"{self.first_line} {self.second_line}"

    def searchable_text(self, current_value: str) -> str:
        """Build the text a search query is tested against.

        Args:
            current_value: The proposed name currently held in the rename session.

        Returns:
            Descriptive lines, proposed name and original name separated by spaces.
        """
        return f"{self.first_line} {self.second_line} {current_value} {self.name}"
