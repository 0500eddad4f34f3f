"""Decode META-INF/container.xml and the OPF package document."""

import posixpath

from lxml import etree

from epub2pdf.core.archive import Archive
from epub2pdf.core.errors import (
    ArchiveEntryError,
    MalformedXMLError,
    MissingContainerError,
    MissingPackageError,
    NoRootFileError,
)
from epub2pdf.models.epub import (
    ContainerDescriptor,
    ManifestItem,
    PackageDocument,
    RootFile,
    SpineRef,
)

CONTAINER_PATH = "META-INF/container.xml"


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


def _local_name(element: etree._Element) -> str | None:
    """Tag name without namespace; None for comments and PIs."""
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(element: etree._Element, name: str) -> list[etree._Element]:
    return [child for child in element if _local_name(child) == name]


def _first_child(element: etree._Element, name: str) -> etree._Element | None:
    for child in element:
        if _local_name(child) == name:
            return child
    return None


def _first_text(element: etree._Element | None, name: str) -> str:
    if element is None:
        return ""
    child = _first_child(element, name)
    if child is None:
        return ""
    return "".join(child.itertext()).strip()


def _read_entry(archive: Archive, stored_path: str) -> bytes | None:
    try:
        return archive.lookup(stored_path)
    except ArchiveEntryError as e:
        raise MalformedXMLError(f"Unreadable entry ({e.reason})", stored_path) from e


def _parse_root(data: bytes, stored_path: str, expected: str) -> etree._Element:
    try:
        root = etree.fromstring(data, parser=_xml_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedXMLError(f"Failed to parse XML ({e})", stored_path) from e

    if root is None or _local_name(root) != expected:
        found = _local_name(root) if root is not None else None
        raise MalformedXMLError(
            f"Expected <{expected}> root element, found <{found}>", stored_path
        )
    return root


def parse_container(archive: Archive) -> ContainerDescriptor:
    """Read the container descriptor and list its root documents."""
    data = _read_entry(archive, CONTAINER_PATH)
    if data is None:
        raise MissingContainerError("Container descriptor not found", CONTAINER_PATH)

    root = _parse_root(data, CONTAINER_PATH, "container")

    root_files = []
    for rootfiles in _children(root, "rootfiles"):
        for element in _children(rootfiles, "rootfile"):
            full_path = (element.get("full-path") or "").strip()
            if not full_path:
                continue
            root_files.append(
                RootFile(
                    full_path=full_path,
                    media_type=element.get("media-type") or "",
                )
            )

    if not root_files:
        raise NoRootFileError("No rootfile found in container", CONTAINER_PATH)

    return ContainerDescriptor(root_files=root_files)


def parse_package(archive: Archive, root_path: str) -> PackageDocument:
    """Decode the package document stored at ``root_path``."""
    data = _read_entry(archive, root_path)
    if data is None:
        raise MissingPackageError("Package document not found", root_path)

    root = _parse_root(data, root_path, "package")

    metadata = _first_child(root, "metadata")
    manifest = _first_child(root, "manifest")
    spine = _first_child(root, "spine")

    items = []
    if manifest is not None:
        for element in _children(manifest, "item"):
            items.append(
                ManifestItem(
                    id=element.get("id") or "",
                    href=element.get("href") or "",
                    media_type=element.get("media-type") or "",
                )
            )

    refs = []
    if spine is not None:
        refs = [
            SpineRef(idref=element.get("idref") or "")
            for element in _children(spine, "itemref")
        ]

    return PackageDocument(
        title=_first_text(metadata, "title"),
        creator=_first_text(metadata, "creator"),
        manifest=items,
        spine=refs,
    )


def package_base_directory(root_path: str) -> str:
    """Directory of the package document; "" when it sits at the top level."""
    return posixpath.dirname(root_path)
