from dataclasses import dataclass
from typing import Optional

from plan2read.community import CommunityWorkflow
from plan2read.config import settings
from plan2read.discussion import DiscussionBoard
from plan2read.gateway import RemoteStoreGateway
from plan2read.identity import get_user_id
from plan2read.preferences import PreferenceStore
from plan2read.repository import ScheduleRepository
from plan2read.transports import Transport, get_transport


@dataclass
class PlannerClient:
    """Everything a front end needs, wired to one gateway and one user"""
    user_id: str
    prefs: PreferenceStore
    gateway: RemoteStoreGateway
    repository: ScheduleRepository
    community: CommunityWorkflow
    discussion: DiscussionBoard


def create_client(transport: Optional[Transport] = None, prefs: Optional[PreferenceStore] = None) -> PlannerClient:
    """Build the client; the transport is chosen once here, from config unless given"""
    prefs = prefs or PreferenceStore(settings.preferences_path)
    user_id = get_user_id(prefs)
    gateway = RemoteStoreGateway(transport or get_transport())
    repository = ScheduleRepository(gateway, user_id, prefs)
    return PlannerClient(
        user_id=user_id,
        prefs=prefs,
        gateway=gateway,
        repository=repository,
        community=CommunityWorkflow(gateway, user_id, repository),
        discussion=DiscussionBoard(gateway, author=settings.discussion_author),
    )
