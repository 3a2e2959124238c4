"""Maximum field lengths accepted by the NETbilling direct-mode API."""
from typing import Dict, Mapping

FIELD_MAX_LENGTHS: Mapping[str, int] = {
    'bill_name1': 20,
    'bill_name2': 20,
    'bill_street': 80,
    'bill_city': 40,
    'bill_state': 30,
    'bill_zip': 20,
    'bill_country': 2,
    'ship_name1': 20,
    'ship_name2': 20,
    'ship_street': 80,
    'ship_city': 40,
    'ship_state': 30,
    'ship_zip': 20,
    'ship_country': 2,
    'cust_email': 60,
    'cust_phone': 40,
    'cust_ip': 15,
    'site_tag': 12,
    'description': 4000,
    'user_data': 4000,
    'misc_info': 4000,
    'bill_photo_id_no': 20,
    'bill_photo_id_state': 2,
}


def truncate_parameters(
    parameters: Dict[str, str],
    table: Mapping[str, int] = FIELD_MAX_LENGTHS,
) -> Dict[str, str]:
    """
    Clip oversized values to the gateway's maximum lengths.

    Values longer than the limit are cut to their first ``max`` characters;
    anything at or under the limit, and any field the table does not list,
    is left as is. Truncation is silent: the gateway would reject the whole
    request otherwise.

    Args:
        parameters: Request parameters, modified in place
        table: Field name -> maximum length

    Returns:
        The same ``parameters`` mapping
    """
    for field_name, max_length in table.items():
        value = parameters.get(field_name)
        if value and len(value) > max_length:
            parameters[field_name] = value[:max_length]
    return parameters
