"""
isdc/codes.py - Canonical ISDC code table.

Codes are digit strings whose length encodes the level:

    "04"      L1 principal activity
    "0405"    L2 activity group      (parent "04")
    "040501"  L3 typical activity    (parent "0405")

The published dotted notation ("04.0500", "04.0501") is accepted and
converted by canonical_code(). Values are (name, default contingency %).
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple

UNASSIGNED_CODE = "UNASSIGNED"

L1_CODE_LENGTH = 2
L2_CODE_LENGTH = 4
L3_CODE_LENGTH = 6


ISDC_L1: Dict[str, Tuple[str, float]] = {
    "01": ("Pre-decommissioning actions", 10),
    "02": ("Facility shutdown activities", 10),
    "03": ("Additional activities for safe enclosure or entombment", 15),
    "04": ("Dismantling activities within the controlled area", 20),
    "05": ("Waste processing, storage and disposal", 15),
    "06": ("Site infrastructure and operation", 10),
    "07": ("Conventional dismantling, demolition and site restoration", 15),
    "08": ("Project management, engineering and support", 10),
    "09": ("Research and development", 20),
    "10": ("Fuel and nuclear material", 15),
    "11": ("Miscellaneous expenditures", 10),
}


ISDC_L2: Dict[str, Tuple[str, float]] = {
    "0101": ("Decommissioning planning", 10),
    "0102": ("Facility characterisation", 10),
    "0103": ("Safety, security and environmental studies", 10),
    "0104": ("Waste management planning", 10),
    "0105": ("Authorisation", 10),
    "0106": ("Preparing management group and organisation", 10),
    "0201": ("Plant shutdown and inspection", 10),
    "0202": ("Drainage of systems, removal of residual materials", 10),
    "0203": ("Radiological inventory characterisation", 10),
    "0204": ("Hazardous/contaminated material surveys", 10),
    "0205": ("Decontamination actions for plant restart preparation", 10),
    "0301": ("Site preparation for safe enclosure", 15),
    "0302": ("Site surveillance and maintenance", 15),
    "0303": ("Entombment activities", 15),
    "0401": ("Procurement of dismantling equipment", 10),
    "0402": ("Preparations and support for dismantling", 10),
    "0403": ("Pre-dismantling decontamination", 20),
    "0404": ("Removal of materials requiring specific procedures", 20),
    "0405": ("Dismantling of main process systems", 25),
    "0406": ("Dismantling of other systems and components", 20),
    "0407": ("Dismantling of building structures", 20),
    "0408": ("Final radioactivity survey", 10),
    "0501": ("Procurement of waste management equipment", 10),
    "0502": ("HLW processing, storage and disposal", 15),
    "0503": ("ILW processing, storage and disposal", 15),
    "0504": ("LLW processing, storage and disposal", 15),
    "0505": ("VLLW processing, storage and disposal", 15),
    "0506": ("Exempt waste processing and disposal", 15),
    "0507": ("HLW management ongoing", 15),
    "0508": ("ILW management ongoing", 15),
    "0509": ("LLW management ongoing", 15),
    "0510": ("VLLW management ongoing", 15),
    "0511": ("Short-lived waste management", 15),
    "0512": ("Exempt waste management ongoing", 15),
    "0513": ("Non-radioactive waste processing", 10),
    "0601": ("Site security and access control", 10),
    "0602": ("Site operation and maintenance", 10),
    "0603": ("Operation of support systems", 10),
    "0604": ("Radiation and environmental safety monitoring", 10),
    "0701": ("Procurement of demolition equipment", 10),
    "0702": ("Building dismantling and demolition", 15),
    "0703": ("Final site survey", 10),
    "0704": ("Landscaping and site restoration", 15),
    "0801": ("Mobilisation and preparatory work", 10),
    "0802": ("Project management", 10),
    "0803": ("Engineering support", 10),
    "0804": ("Information, documentation and data management", 10),
    "0805": ("Quality assurance and control", 10),
    "0806": ("Health, safety and environmental protection", 10),
    "0807": ("Emergency services and nuclear security", 10),
    "0808": ("Regulatory and institutional interface", 10),
    "0809": ("Public relations", 10),
    "0901": ("Equipment development", 20),
    "0902": ("Technique development", 20),
    "0903": ("Analyses and studies", 20),
    "1001": ("Removal and transfer of fuel from facility", 15),
    "1002": ("Fuel pool operation", 15),
    "1003": ("On-site fuel conditioning and storage", 15),
    "1004": ("Fuel disposal", 15),
    "1005": ("Management of other nuclear materials", 15),
    "1101": ("Owner costs", 10),
    "1102": ("Taxes", 10),
    "1103": ("Insurances", 10),
    "1104": ("Interest on funds", 10),
    "1105": ("Other miscellaneous", 10),
}


# Detailed activities carried in the seed table; projects add their own.
ISDC_L3: Dict[str, Tuple[str, float]] = {
    "010101": ("Strategic planning", 10),
    "010102": ("Preliminary planning", 10),
    "010103": ("Final planning", 10),
    "010201": ("Detailed facility characterisation", 10),
    "010202": ("Hazardous-material surveys and analyses", 10),
    "010203": ("Establishing a facility inventory database", 10),
    "040301": ("Drainage of remaining systems", 20),
    "040302": ("Removal of sludge and products from remaining systems", 20),
    "040303": ("Decontamination of remaining systems", 20),
    "040304": ("Decontamination of areas in buildings", 20),
    "040501": ("Dismantling of reactor internals", 25),
    "040502": ("Dismantling of reactor vessel and core components", 25),
    "040503": ("Dismantling of other primary loop components", 25),
    "040504": ("Dismantling of main process systems in fuel cycle facilities", 25),
    "040505": ("Dismantling of main process systems in other facilities", 25),
    "040506": ("Dismantling of external thermal/biological shields", 25),
    "040601": ("Dismantling of auxiliary systems", 20),
    "040602": ("Dismantling of electrical systems", 20),
    "040603": ("Dismantling of instrumentation and control systems", 20),
    "040604": ("Dismantling of ventilation and filtering systems", 20),
    "050301": ("ILW retrieval, handling and characterisation", 15),
    "050302": ("ILW treatment and conditioning", 15),
    "050303": ("ILW storage", 15),
    "050304": ("ILW disposal", 15),
    "050401": ("LLW retrieval, handling and characterisation", 15),
    "050402": ("LLW treatment and conditioning", 15),
    "050403": ("LLW storage", 15),
    "050404": ("LLW disposal", 15),
    "051301": ("Recycled concrete processing", 10),
    "051302": ("Recycled metals processing", 10),
    "051303": ("Recycled materials disposal", 10),
    "051304": ("Hazardous waste processing", 15),
    "051305": ("Hazardous waste disposal", 15),
    "051306": ("Conventional waste processing", 10),
    "051307": ("Conventional waste disposal", 10),
    "070201": ("Conventional building dismantling", 15),
    "070202": ("Building structure demolition", 15),
    "070203": ("Foundation removal", 15),
    "080201": ("Overall management", 10),
    "080202": ("Schedule and cost management", 10),
    "080203": ("Contractor management", 10),
    "080204": ("Stakeholder coordination", 10),
}


def canonical_code(code: Optional[str]) -> str:
    """
    Normalise an ISDC code to its undotted digit form.

    "01.0100" -> "0101" (an L2 written with a zero-padded tail),
    "01.0101" -> "010101", "0405" -> "0405". Anything else is returned
    stripped and unchanged for the hierarchy to reject.
    """
    if code is None:
        return ""
    code = str(code).strip()
    if "." not in code:
        return code

    head, _, tail = code.partition(".")
    tail = tail.replace(".", "")
    if len(tail) == L2_CODE_LENGTH and tail.endswith("00"):
        return head + tail[:2]
    return head + tail


def is_well_formed(code: str) -> bool:
    """Digits only, even length, at least an L2 code."""
    return (
        code.isdigit()
        and len(code) >= L2_CODE_LENGTH
        and len(code) % 2 == 0
    )


def level_of(code: str) -> int:
    """ISDC level implied by code length (L1=2, L2=4, L3=6+ digits)."""
    if len(code) <= L1_CODE_LENGTH:
        return 1
    if len(code) <= L2_CODE_LENGTH:
        return 2
    return 3


def parent_of(code: str) -> Optional[str]:
    """Structural parent code, None for an L1 code."""
    if len(code) <= L1_CODE_LENGTH:
        return None
    if len(code) <= L2_CODE_LENGTH:
        return code[:L1_CODE_LENGTH]
    return code[:L2_CODE_LENGTH]
