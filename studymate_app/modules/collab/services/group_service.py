"""
Study Group Service.

Groups are joined with an invite code. The creator is the owner: only
the owner can delete the group, and the owner cannot leave it.
"""
from flask import current_app
from sqlalchemy import func

from studymate_app.core.error_handlers import AuthorizationError, NotFoundError, ValidationError
from studymate_app.core.extensions import db
from studymate_app.core.signals import content_created, content_deleted

from ..models import StudyGroup, StudyGroupMember, generate_invite_code


class GroupService:

    @staticmethod
    def list_user_groups(user_id):
        """
        Returns:
            list[tuple[StudyGroup, str, int]]: group, the user's role, member count.
        """
        member_counts = (
            db.select(StudyGroupMember.group_id, func.count(StudyGroupMember.member_id).label('member_count'))
            .group_by(StudyGroupMember.group_id)
            .subquery()
        )
        rows = db.session.execute(
            db.select(StudyGroup, StudyGroupMember.role, member_counts.c.member_count)
            .join(StudyGroupMember, StudyGroupMember.group_id == StudyGroup.group_id)
            .join(member_counts, member_counts.c.group_id == StudyGroup.group_id)
            .where(StudyGroupMember.user_id == user_id)
            .order_by(StudyGroup.name.asc())
        ).all()
        return [(group, role, count) for group, role, count in rows]

    @staticmethod
    def _unique_invite_code():
        code = generate_invite_code()
        while StudyGroup.query.filter_by(invite_code=code).first() is not None:
            code = generate_invite_code()
        return code

    @staticmethod
    def create_group(user_id, name, description=None):
        group = StudyGroup(
            name=name.strip(),
            description=(description or '').strip() or None,
            owner_id=user_id,
            invite_code=GroupService._unique_invite_code(),
        )
        group.members.append(StudyGroupMember(user_id=user_id, role=StudyGroupMember.ROLE_OWNER))
        db.session.add(group)
        db.session.commit()
        content_created.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='study_group', entity_id=group.group_id, title=group.name)
        return group

    @staticmethod
    def get_group_for_member(user_id, group_id):
        group = db.session.get(StudyGroup, group_id)
        if group is None or group.membership_for(user_id) is None:
            raise NotFoundError('Study group not found.', redirect_endpoint='collab.groups', resource='study_group')
        return group

    @staticmethod
    def join_group(user_id, invite_code):
        """
        Returns:
            tuple[StudyGroup, bool]: the group and whether the user was newly added.
        """
        code = (invite_code or '').strip().upper()
        group = StudyGroup.query.filter_by(invite_code=code).first()
        if group is None:
            raise ValidationError('Invalid invite code.', redirect_endpoint='collab.groups')
        if group.membership_for(user_id) is not None:
            return group, False
        group.members.append(StudyGroupMember(user_id=user_id, role=StudyGroupMember.ROLE_MEMBER))
        db.session.commit()
        current_app.logger.info(f"User {user_id} joined study group {group.group_id}")
        return group, True

    @staticmethod
    def leave_group(user_id, group_id):
        group = GroupService.get_group_for_member(user_id, group_id)
        membership = group.membership_for(user_id)
        if membership.role == StudyGroupMember.ROLE_OWNER:
            raise ValidationError('The owner cannot leave the group. Delete it instead.',
                                  redirect_endpoint='collab.groups')
        db.session.delete(membership)
        db.session.commit()
        return group

    @staticmethod
    def delete_group(user_id, group_id):
        group = GroupService.get_group_for_member(user_id, group_id)
        if group.owner_id != user_id:
            raise AuthorizationError('Only the group owner can delete this group.', redirect_endpoint='collab.groups')
        name = group.name
        db.session.delete(group)
        db.session.commit()
        content_deleted.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='study_group', entity_id=group_id, title=name)
