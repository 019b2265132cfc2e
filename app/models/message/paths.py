SOAP_BODY = "SOAP-ENV:Body"
STUURGEGEVENS = "ns1:stuurgegevens"

BERICHTSOORT = "ns1:berichtsoort"
ENTITEITTYPE = "ns1:entiteittype"
REFERENTIENUMMER = "ns1:referentienummer"
TIJDSTIP_BERICHT = "ns1:tijdstipBericht"
CROSS_REFNUMMER = "ns1:crossRefnummer"

BODY = "ns2:body"

# vraagBericht Lv01-BLJ
ASSESSMENT_GROUP = f"{BODY}.ns2:BLJ"
GROUP_CITIZEN_ID = "ns2:BLJPRSBLG.ns2:PRS.ns2:bsn-nummer"

# vraagBericht Lv01-OPO
ASSESSMENT_NUMBER = f"{BODY}.ns2:OPO.ns2:aanslagBiljetNummer"
ASSESSMENT_SEQUENCE_NUMBER = f"{BODY}.ns2:OPO.ns2:aanslagBiljetVolgNummer"

# kennisgevingsBericht Lk01-BGB
OBJECTION = f"{BODY}.ns2:BGB"
APPLICATION_NUMBER = "ns2:aanvraagnummer"
APPLICATION_DATE = "ns2:aanvraagdatum"
WANTS_TO_BE_HEARD = "ns2:indicatieHoorzitting"
OBJECTION_CITIZEN_ID = "ns2:BGBPRSBZW.ns2:PRS.ns2:bsn-nummer"
ATTACHMENTS = "ns2:BGBATT"
ATTACHMENT_FILE_NAME = "ns2:ATT.ns2:naam"
ATTACHMENT_FILE_TYPE = "ns2:ATT.ns2:type"
ATTACHMENT_FILE_CONTENT = "ns2:ATT.ns2:bestand"

EXTRA_ELEMENTS_CONTAINER = "ns2:extraElementen"
EXTRA_ELEMENTS = f"{EXTRA_ELEMENTS_CONTAINER}.ns1:extraElement"
EXTRA_ELEMENT_NAME = "@naam"
