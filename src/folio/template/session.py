# SPDX-License-Identifier: MIT

from folio.model.session import Session


def get_session_template() -> Session:
    return {"open_ids": [], "active_id": None}
