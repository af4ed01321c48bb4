from __future__ import annotations

# GPO bill version codes.
VERSION_NAMES: dict[str, str] = {
    "as": "Amendment in Senate",
    "ash": "Additional Sponsors House",
    "ath": "Agreed to House",
    "ats": "Agreed to Senate",
    "cdh": "Committee Discharged House",
    "cds": "Committee Discharged Senate",
    "cph": "Considered and Passed House",
    "cps": "Considered and Passed Senate",
    "eah": "Engrossed Amendment House",
    "eas": "Engrossed Amendment Senate",
    "eh": "Engrossed in House",
    "ehr": "Engrossed in House-Reprint",
    "eh_s": "Engrossed in House (No.) Star Print [*]",
    "enr": "Enrolled Bill",
    "es": "Engrossed in Senate",
    "esr": "Engrossed in Senate-Reprint",
    "es_s": "Engrossed in Senate (No.) Star Print",
    "fah": "Failed Amendment House",
    "fps": "Failed Passage Senate",
    "hdh": "Held at Desk House",
    "hds": "Held at Desk Senate",
    "ih": "Introduced in House",
    "ihr": "Introduced in House-Reprint",
    "ih_s": "Introduced in House (No.) Star Print [*]",
    "iph": "Indefinitely Postponed in House",
    "ips": "Indefinitely Postponed in Senate",
    "is": "Introduced in Senate",
    "isr": "Introduced in Senate-Reprint",
    "is_s": "Introduced in Senate (No.) Star Print [*]",
    "lth": "Laid on Table in House",
    "lts": "Laid on Table in Senate",
    "oph": "Ordered to be Printed House",
    "ops": "Ordered to be Printed Senate",
    "pch": "Placed on Calendar House",
    "pcs": "Placed on Calendar Senate",
    "pp": "Public Print",
    "rah": "Referred w/Amendments House",
    "ras": "Referred w/Amendments Senate",
    "rch": "Reference Change House",
    "rcs": "Reference Change Senate",
    "rdh": "Received in House",
    "rds": "Received in Senate",
    "re": "Reprint of an Amendment",
    "reah": "Re-engrossed Amendment House",
    "renr": "Re-enrolled Bill",
    "res": "Re-engrossed Amendment Senate",
    "rfh": "Referred in House",
    "rfhr": "Referred in House-Reprint",
    "rfh_s": "Referred in House (No.) Star Print [*]",
    "rfs": "Referred in Senate",
    "rfsr": "Referred in Senate-Reprint",
    "rfs_s": "Referred in Senate (No.) Star Print [*]",
    "rh": "Reported in House",
    "rhr": "Reported in House-Reprint",
    "rh_s": "Reported in House (No.) Star Print [*]",
    "rih": "Referral Instructions House",
    "ris": "Referral Instructions Senate",
    "rs": "Reported in Senate",
    "rsr": "Reported in Senate-Reprint",
    "rs_s": "Reported in Senate (No.) Star Print [*]",
    "rth": "Referred to Committee House",
    "rts": "Referred to Committee Senate",
    "sas": "Additional Sponsors Senate",
    "sc": "Sponsor Change House",
    "s_p": "Star (*) Print of an Amendment",
}


def version_name_for(code: str) -> str | None:
    return VERSION_NAMES.get(code)
