"""Shared fixtures for the edifact_mapping test-suite.

Provides a small on-disk mapping tree and isolates configuration loading from
the developer's home directory.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from edifact_mapping.config import ConfigManager
from edifact_mapping.core.provider import MappingProvider

ORDERS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<message>
  <defaults minOccur="0" maxOccur="1"/>
  <!-- header -->
  <segment id="UNH" minOccur="1"/>
  <segment id="BGM"/>
  <group id="SG2" maxOccur="99">
    <segment id="NAD" minOccur="1"/>
    <group id="SG3">
      <segment id="RFF"/>
    </group>
  </group>
  <segment id="UNT" minOccur="1"/>
</message>
"""

CONTRL_XML = """<?xml version="1.0" encoding="UTF-8"?>
<message>
  <defaults minOccur="1"/>
  <segment id="UNH"/>
  <segment id="UCI"/>
  <segment id="UNT"/>
</message>
"""

SEGMENTS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<segments>
  <segment id="BGM" name="Beginning of message">
    <composite_data_element id="C002" name="Document/message name">
      <data_element id="1001" name="Document name code"/>
      <data_element id="1131" name="Code list identification code"/>
    </composite_data_element>
    <data_element id="1004" name="Document identifier"/>
  </segment>
  <segment id="DTM" name="Date/time/period">
    <composite_data_element id="C507">
      <data_element id="2005"/>
      <data_element id="2380"/>
    </composite_data_element>
  </segment>
</segments>
"""

SERVICE_SEGMENTS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<segments>
  <segment id="UNH" name="Message header">
    <data_element id="0062"/>
    <composite_data_element id="S009">
      <data_element id="0065"/>
      <data_element id="0052"/>
    </composite_data_element>
  </segment>
</segments>
"""

CODES_XML = """<?xml version="1.0" encoding="UTF-8"?>
<codes>
  <data_element id="1001" desc="Document name code">
    <value id="220" desc="Order"/>
    <value id="380" desc="Commercial invoice"/>
  </data_element>
  <data_element id="4343">
    <value id="AC" desc="Acknowledge - with detail and change"/>
    <value desc="no id"/>
  </data_element>
  <data_element desc="no id at all">
    <value id="X" desc="ignored"/>
  </data_element>
</codes>
"""


def write_mapping_tree(base: Path) -> Path:
    """Populate *base* with a D95B directory and a Service_V3 folder."""
    directory = base / "D95B"
    (directory / "messages").mkdir(parents=True)
    (directory / "messages" / "orders.xml").write_text(ORDERS_XML, encoding="utf-8")
    (directory / "messages" / "broken.xml").write_text("<not-xml", encoding="utf-8")
    (directory / "messages" / "README.txt").write_text("not a message", encoding="utf-8")
    (directory / "segments.xml").write_text(SEGMENTS_XML, encoding="utf-8")
    (directory / "codes.xml").write_text(CODES_XML, encoding="utf-8")

    service = base / "Service_V3"
    (service / "messages").mkdir(parents=True)
    (service / "messages" / "contrl.xml").write_text(CONTRL_XML, encoding="utf-8")
    (service / "segments.xml").write_text(SERVICE_SEGMENTS_XML, encoding="utf-8")
    return base


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point user overrides at an empty folder and reload config per test."""
    config_dir = tmp_path_factory.mktemp("user_config")
    monkeypatch.setenv("EDIFACT_MAPPING_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("EDIFACT_MAPPING_DEBUG_MODULES", raising=False)
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture
def mapping_tree(tmp_path):
    return write_mapping_tree(tmp_path / "mapping")


@pytest.fixture
def provider(mapping_tree):
    return MappingProvider("95B", path=str(mapping_tree))
