"""
Pytest configuration for stylequill
"""

import pytest
import logging
import sys
from pathlib import Path

from stylequill import Document, StyleManager

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

SAMPLE_DOCUMENT_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:document xmlns:w="{W_NS}">
  <w:body>
    <w:p>
      <w:pPr><w:pStyle w:val="Heading 1"/></w:pPr>
      <w:r><w:t>Introduction</w:t></w:r>
    </w:p>
    <w:p>
      <w:r><w:t>Plain body text</w:t></w:r>
    </w:p>
    <w:p>
      <w:pPr><w:pStyle w:val="Normal"/></w:pPr>
      <w:r><w:rPr><w:rStyle w:val="Code"/></w:rPr><w:t>x = 1</w:t></w:r>
    </w:p>
    <w:tbl>
      <w:tblPr/>
      <w:tblGrid><w:gridCol/></w:tblGrid>
      <w:tr><w:tc><w:p><w:r><w:t>Cell</w:t></w:r></w:p></w:tc></w:tr>
    </w:tbl>
  </w:body>
</w:document>
"""

SAMPLE_DEFINITIONS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<StyleSheet xmlns="http://duckx.org/styles" version="1.0">
  <Style name="Body" type="paragraph">
    <Paragraph>
      <Alignment>justify</Alignment>
      <SpaceAfter>6pt</SpaceAfter>
      <LineSpacing>1.15</LineSpacing>
    </Paragraph>
  </Style>
  <Style name="Title" type="mixed" base="Body">
    <Paragraph>
      <Alignment>center</Alignment>
      <SpaceBefore>0.5in</SpaceBefore>
    </Paragraph>
    <Character>
      <Font name="Arial" size="18pt"/>
      <Color>#000080</Color>
      <Format bold="true"/>
    </Character>
  </Style>
  <Style name="Emphasis" type="character">
    <Character>
      <Highlight>light-gray</Highlight>
      <Format italic="yes" underline="1"/>
    </Character>
  </Style>
  <Style name="Grid" type="table">
    <Table>
      <Width>50%</Width>
      <Alignment>center</Alignment>
      <Borders style="single" width="1pt" color="black"/>
      <CellPadding>4pt</CellPadding>
    </Table>
  </Style>
  <StyleSet name="Report" description="Report layout">
    <Include>Grid</Include>
    <Include>Body</Include>
    <Include>Emphasis</Include>
  </StyleSet>
</StyleSheet>
"""


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid leaking handlers between tests."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def style_manager():
    """Empty style manager."""
    return StyleManager()


@pytest.fixture
def builtin_manager():
    """Style manager with every built-in category loaded."""
    manager = StyleManager()
    manager.load_all_built_in_styles()
    return manager


@pytest.fixture
def sample_document():
    """Document with a heading, an unstyled paragraph, a Normal paragraph and a table."""
    return Document.from_xml(SAMPLE_DOCUMENT_XML)


@pytest.fixture
def definitions_xml():
    return SAMPLE_DEFINITIONS_XML


@pytest.fixture
def definitions_file(temp_dir):
    path = temp_dir / "styles_def.xml"
    path.write_text(SAMPLE_DEFINITIONS_XML, encoding="utf-8")
    return path
