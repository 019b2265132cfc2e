from typing import Any, Dict, List

REFERENTIENUMMER = "REF-0001"
TIJDSTIP_BERICHT = "20240105101500000000"
BSN = "999993653"


def stuurgegevens(berichtsoort: str, entiteittype: str, **extra: Any) -> Dict[str, Any]:
    header = {
        "ns1:berichtsoort": berichtsoort,
        "ns1:entiteittype": entiteittype,
        "ns1:referentienummer": REFERENTIENUMMER,
        "ns1:tijdstipBericht": TIJDSTIP_BERICHT,
    }
    header.update(extra)
    return header


def extra_element(name: str, value: str) -> Dict[str, Any]:
    return {"@naam": name, "#": value}


def blj_entry(bsn: str | None = BSN, year: str | None = None) -> Dict[str, Any]:
    entry: Dict[str, Any] = {}
    if bsn is not None:
        entry["ns2:BLJPRSBLG"] = {"ns2:PRS": {"ns2:bsn-nummer": bsn}}
    if year is not None:
        entry["ns2:extraElementen"] = {"ns1:extraElement": extra_element("belastingJaar", year)}
    return entry


def vraag_bericht(entiteittype: str, body: Dict[str, Any], berichtsoort: str = "Lv01") -> Dict[str, Any]:
    return {
        "SOAP-ENV:Body": {
            "ns2:vraagBericht": {
                "ns1:stuurgegevens": stuurgegevens(berichtsoort, entiteittype),
                "ns2:body": body,
            }
        }
    }


def list_request(entries: Any) -> Dict[str, Any]:
    return vraag_bericht("BLJ", {"ns2:BLJ": entries})


def get_request(number: str | None, sequence: str | None = None) -> Dict[str, Any]:
    opo: Dict[str, Any] = {}
    if number is not None:
        opo["ns2:aanslagBiljetNummer"] = number
    if sequence is not None:
        opo["ns2:aanslagBiljetVolgNummer"] = sequence
    return vraag_bericht("OPO", {"ns2:OPO": opo})


def objection_body(
    elements: List[Dict[str, Any]] | Dict[str, Any] | None,
    bsn: str | None = BSN,
    application_number: str | None = "AV-2024-0001",
    application_date: str | None = "20240105101500000000",
    hearing: str | None = "J",
    attachments: Any = None,
) -> Dict[str, Any]:
    bgb: Dict[str, Any] = {}
    if application_number is not None:
        bgb["ns2:aanvraagnummer"] = application_number
    if application_date is not None:
        bgb["ns2:aanvraagdatum"] = application_date
    if hearing is not None:
        bgb["ns2:indicatieHoorzitting"] = hearing
    if bsn is not None:
        bgb["ns2:BGBPRSBZW"] = {"ns2:PRS": {"ns2:bsn-nummer": bsn}}
    if attachments is not None:
        bgb["ns2:BGBATT"] = attachments
    if elements is not None:
        bgb["ns2:extraElementen"] = {"ns1:extraElement": elements}
    return {"ns2:BGB": bgb}


def objection_request(elements: Any, header: Dict[str, Any] | None = None, **kwargs: Any) -> Dict[str, Any]:
    return {
        "SOAP-ENV:Body": {
            "ns2:kennisgevingsBericht": {
                "ns1:stuurgegevens": header if header is not None else stuurgegevens("Lk01", "BGB"),
                "ns2:body": objection_body(elements, **kwargs),
            }
        }
    }


def objection_elements() -> List[Dict[str, Any]]:
    return [
        extra_element("kenmerkNummerBesluit", "123456-2"),
        extra_element("kenmerkVolgNummerBesluit", "2"),
        extra_element("belastingplichtnummer", "12345"),
        extra_element("codeGriefSoort", "WOZ"),
        extra_element("keuzeOmschrijvingGrief", "Waarde te hoog"),
        extra_element("toelichtingGrief", "Vergelijkbare woningen zijn goedkoper"),
        extra_element("beschikkingSleutel", "BS-1"),
        extra_element("codeGriefSoort", "OVERIG"),
    ]


def assessment(number: str = "123456", sequence: str = "2", year: str = "2024", lines: List[Dict[str, Any]] | None = None) -> Dict[str, Any]:
    return {
        "assessmentNumber": number,
        "assessmentSequenceNumber": sequence,
        "taxYear": year,
        "taxpayer": {"citizenId": BSN},
        "objectionPossible": True,
        "assessmentLines": lines if lines is not None else [{"code": "OZB", "objectionPossible": True}],
    }


LIST_REQUEST_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<SOAP-ENV:Envelope xmlns:SOAP-ENV="http://schemas.xmlsoap.org/soap/envelope/"
    xmlns:ns1="http://www.egem.nl/StUF/StUF0301"
    xmlns:ns2="http://www.egem.nl/StUF/sector/bg/0310">
  <SOAP-ENV:Body>
    <ns2:vraagBericht>
      <ns1:stuurgegevens>
        <ns1:berichtsoort>Lv01</ns1:berichtsoort>
        <ns1:entiteittype>BLJ</ns1:entiteittype>
        <ns1:referentienummer>{REFERENTIENUMMER}</ns1:referentienummer>
        <ns1:tijdstipBericht>{TIJDSTIP_BERICHT}</ns1:tijdstipBericht>
      </ns1:stuurgegevens>
      <ns2:body>
        <ns2:BLJ>
          <ns2:BLJPRSBLG>
            <ns2:PRS>
              <ns2:bsn-nummer>{BSN}</ns2:bsn-nummer>
            </ns2:PRS>
          </ns2:BLJPRSBLG>
          <ns2:extraElementen>
            <ns1:extraElement naam="belastingJaar">2023</ns1:extraElement>
          </ns2:extraElementen>
        </ns2:BLJ>
        <ns2:BLJ>
          <ns2:BLJPRSBLG>
            <ns2:PRS>
              <ns2:bsn-nummer>{BSN}</ns2:bsn-nummer>
            </ns2:PRS>
          </ns2:BLJPRSBLG>
          <ns2:extraElementen>
            <ns1:extraElement naam="belastingJaar">2024</ns1:extraElement>
          </ns2:extraElementen>
        </ns2:BLJ>
      </ns2:body>
    </ns2:vraagBericht>
  </SOAP-ENV:Body>
</SOAP-ENV:Envelope>
"""

OBJECTION_REQUEST_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<SOAP-ENV:Envelope xmlns:SOAP-ENV="http://schemas.xmlsoap.org/soap/envelope/"
    xmlns:ns1="http://www.egem.nl/StUF/StUF0301"
    xmlns:ns2="http://www.egem.nl/StUF/sector/bg/0310">
  <SOAP-ENV:Body>
    <ns2:kennisgevingsBericht>
      <ns1:stuurgegevens>
        <ns1:berichtsoort>Lk01</ns1:berichtsoort>
        <ns1:entiteittype>BGB</ns1:entiteittype>
        <ns1:referentienummer>{REFERENTIENUMMER}</ns1:referentienummer>
        <ns1:tijdstipBericht>{TIJDSTIP_BERICHT}</ns1:tijdstipBericht>
      </ns1:stuurgegevens>
      <ns2:body>
        <ns2:BGB>
          <ns2:aanvraagnummer>AV-2024-0001</ns2:aanvraagnummer>
          <ns2:aanvraagdatum>20240105</ns2:aanvraagdatum>
          <ns2:indicatieHoorzitting>N</ns2:indicatieHoorzitting>
          <ns2:BGBPRSBZW>
            <ns2:PRS>
              <ns2:bsn-nummer>{BSN}</ns2:bsn-nummer>
            </ns2:PRS>
          </ns2:BGBPRSBZW>
          <ns2:BGBATT>
            <ns2:ATT>
              <ns2:naam>bezwaar.pdf</ns2:naam>
              <ns2:type>application/pdf</ns2:type>
              <ns2:bestand>JVBERi0xLjQ=</ns2:bestand>
            </ns2:ATT>
          </ns2:BGBATT>
          <ns2:extraElementen>
            <ns1:extraElement naam="kenmerkNummerBesluit">123456-2</ns1:extraElement>
            <ns1:extraElement naam="kenmerkVolgNummerBesluit">2</ns1:extraElement>
            <ns1:extraElement naam="belastingplichtnummer">12345</ns1:extraElement>
            <ns1:extraElement naam="codeGriefSoort">WOZ</ns1:extraElement>
            <ns1:extraElement naam="toelichtingGrief">Te hoog</ns1:extraElement>
          </ns2:extraElementen>
        </ns2:BGB>
      </ns2:body>
    </ns2:kennisgevingsBericht>
  </SOAP-ENV:Body>
</SOAP-ENV:Envelope>
"""
