# metalink_file.py

import xml.etree.ElementTree as ET

METALINK_NS = 'urn:ietf:params:xml:ns:metalink'
METALINK_VERSION = '4.0'
HASH_TYPE = 'sha-256'
TORRENT_MEDIATYPE = 'application/x-bittorrent'
SIGNATURE_MEDIATYPE = 'application/pgp-signature'
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'


def mirror_urls(mirrors, name, rel_path, is_dir):
    """
    Per-file download URLs, one per mirror.

    For a single file a mirror that already ends with the file name is taken
    as the file's own URL. This is a plain suffix test, so a base URL whose
    last segment happens to end with the same text is not joined either.
    """
    urls = []
    for mirror in mirrors:
        if not is_dir and mirror.endswith(rel_path):
            urls.append(mirror)
        else:
            urls.append(mirror.rstrip('/') + '/' + name)
    return urls


class MetalinkFile:
    def __init__(self, base_name, is_dir, piece_length, mirrors=()):
        self.base_name = base_name
        self.is_dir = is_dir
        self.piece_length = piece_length
        self.mirrors = list(mirrors)
        self.files = []  # FileHashResult, in enumeration order
        self.signature = None

    @property
    def torrent_name(self):
        return self.base_name + '.torrent'

    def add_result(self, result):
        self.files.append(result)

    def file_name(self, rel_path):
        if self.is_dir:
            return self.base_name + '/' + rel_path
        return rel_path

    def to_element(self):
        root = ET.Element('metalink', {'xmlns': METALINK_NS, 'version': METALINK_VERSION})
        metaurl = ET.SubElement(root, 'metaurl', {'priority': '1', 'mediatype': TORRENT_MEDIATYPE})
        metaurl.text = self.torrent_name

        for result in self.files:
            name = self.file_name(result.rel_path)
            file_el = ET.SubElement(root, 'file', {'name': name})
            ET.SubElement(file_el, 'size').text = str(result.size)
            ET.SubElement(file_el, 'hash', {'type': HASH_TYPE}).text = result.sha256
            pieces = ET.SubElement(file_el, 'pieces', {'type': HASH_TYPE, 'length': str(self.piece_length)})
            for piece_hash in result.piece_hashes:
                ET.SubElement(pieces, 'hash', {'type': HASH_TYPE}).text = piece_hash
            urls = mirror_urls(self.mirrors, name, result.rel_path, self.is_dir)
            for priority, url in enumerate(urls, start=1):
                ET.SubElement(file_el, 'url', {'priority': str(priority)}).text = url

        if self.signature is not None:
            sig = ET.SubElement(root, 'signature', {'mediatype': SIGNATURE_MEDIATYPE})
            sig.text = self.signature
        return root

    def to_xml(self):
        root = self.to_element()
        ET.indent(root, space='  ')
        return XML_HEADER + ET.tostring(root, encoding='unicode')

    def write(self, path):
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_xml())
