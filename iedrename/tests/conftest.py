"""Shared test fixtures."""

from pathlib import Path

import pytest

from iedrename.models.ied import IEDRecord


SAMPLE_SCL = """<?xml version="1.0" encoding="UTF-8"?>
<SCL xmlns="http://www.iec.ch/61850/2003/SCL" version="2007" revision="B" release="4">
  <Header id="station"/>
  <Communication>
    <SubNetwork name="StationBus">
      <ConnectedAP iedName="IED2" apName="AP1"/>
      <ConnectedAP iedName="IED1" apName="AP1"/>
    </SubNetwork>
  </Communication>
  <IED name="IED1" manufacturer="ABB" type="REL670" desc="Line protection" configVersion="1.0"
       originalSclVersion="2007" originalSclRevision="B" originalSclRelease="4">
    <AccessPoint name="AP1">
      <Server>
        <LDevice inst="LD0">
          <LN0 lnClass="LLN0" inst="" lnType="LLN0_T">
            <GSEControl name="GCB1" datSet="DS1" appID="GCB1">
              <IEDName>IED2</IEDName>
            </GSEControl>
          </LN0>
        </LDevice>
      </Server>
    </AccessPoint>
  </IED>
  <IED name="IED2" manufacturer="Siemens" type="7SJ82">
    <AccessPoint name="AP1">
      <Server>
        <LDevice inst="LD0">
          <LN0 lnClass="LLN0" inst="" lnType="LLN0_T">
            <Inputs>
              <ExtRef iedName="IED1" ldInst="LD0" lnClass="LLN0"/>
            </Inputs>
          </LN0>
        </LDevice>
      </Server>
    </AccessPoint>
  </IED>
</SCL>
"""


@pytest.fixture
def scl_file(tmp_path: Path) -> Path:
    """Write the sample SCL document to a temporary file."""
    path = tmp_path / "station.scd"
    path.write_text(SAMPLE_SCL, encoding="utf-8")
    return path


@pytest.fixture
def sample_records() -> list[IEDRecord]:
    return [
        IEDRecord(
            name="IED1",
            manufacturer="ABB",
            type="REL670",
            desc="Line protection",
            config_version="1.0",
            original_scl_version="2007",
            original_scl_revision="B",
            original_scl_release="4",
        ),
        IEDRecord(name="IED2", manufacturer="Siemens", type="7SJ82"),
        IEDRecord(name="IED3", manufacturer="GE", type="F650", desc="Feeder bay 3"),
    ]
