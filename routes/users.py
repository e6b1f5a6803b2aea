from flask import Blueprint, request, jsonify, current_app

from models import db
from models.deleted_user import DeletedUser
from models.user import User
from services.archival import archive_and_delete_user
from services.errors import DuplicateError, NotFoundError, ValidationError
from services.validation import ADDRESS_MAX, NAME_MAX, is_valid_phone
from utils.audit import log_event
from utils.formatting import deleted_user_to_dict, user_to_dict

user_bp = Blueprint("user", __name__, url_prefix="/users")


def _get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@user_bp.get("")
def list_users():
    phone_query = (request.args.get("phone_number") or "").strip()
    page = max(request.args.get("page", type=int) or 1, 1)
    limit = request.args.get("limit", type=int) or current_app.config.get("USERS_PAGE_LIMIT", 10)
    limit = max(1, min(limit, 100))

    q = User.query
    if phone_query:
        q = q.filter(User.phone_number.ilike(f"%{phone_query}%"))

    total = q.count()
    users = q.order_by(User.created_at.desc(), User.id.desc()).offset((page - 1) * limit).limit(limit).all()
    if not users:
        raise NotFoundError("No users found")

    return jsonify(
        count=len(users),
        total_users=total,
        total_pages=(total + limit - 1) // limit,
        current_page=page,
        message="Users retrieved successfully",
        data=[user_to_dict(u) for u in users],
    ), 200


@user_bp.get("/<int:user_id>")
def get_user(user_id: int):
    return jsonify(message="User fetched successfully", data=user_to_dict(_get_user(user_id))), 200


@user_bp.patch("/<int:user_id>")
def update_user(user_id: int):
    data = request.get_json(silent=True) or {}
    user = _get_user(user_id)

    fields = {}
    for key in ("first_name", "last_name", "phone_number", "whatsapp_number", "address", "email"):
        if key in data and data[key] is not None:
            fields[key] = str(data[key]).strip()

    for key in ("first_name", "last_name"):
        if key in fields and (not fields[key] or len(fields[key]) > NAME_MAX):
            raise ValidationError(f"{key} is required (max {NAME_MAX} chars)")
    if "address" in fields and len(fields["address"]) > ADDRESS_MAX:
        raise ValidationError("Address too long")
    if "phone_number" in fields and not is_valid_phone(fields["phone_number"]):
        raise ValidationError("Invalid phone number format")
    if fields.get("whatsapp_number") and not is_valid_phone(fields["whatsapp_number"]):
        raise ValidationError("Invalid WhatsApp number format")
    if fields.get("email") and "@" not in fields["email"]:
        raise ValidationError("Invalid email")

    new_phone = fields.get("phone_number")
    if new_phone and new_phone != user.phone_number:
        if User.query.filter_by(phone_number=new_phone).first():
            raise DuplicateError("Phone number already exists")

    for key, value in fields.items():
        # required fields were checked non-empty above; optional ones clear to NULL
        setattr(user, key, value or None)
    db.session.commit()

    log_event("USER_UPDATE", user_id=user.id, entity="user", entity_id=user.id, metadata={"fields": sorted(fields)})
    return jsonify(message="User updated successfully", data=user_to_dict(user)), 200


@user_bp.delete("/<int:user_id>")
def delete_user(user_id: int):
    result = archive_and_delete_user(db.session, user_id)

    log_event(
        "USER_DELETE",
        user_id=user_id,
        entity="user",
        entity_id=user_id,
        metadata={"archive_id": result.archive_id, "bookings": result.bookings, "slots": result.slots},
    )
    if result.active_bookings:
        notification = f"User had {result.active_bookings} active booking(s) which were cancelled and deleted."
    else:
        notification = "No active bookings at the time of deletion."

    return jsonify(
        message="User deleted successfully (archived user + billing, deleted bookings/slots)",
        archive_id=result.archive_id,
        deleted={
            "bookings": result.bookings,
            "slots": result.slots,
            "billings": result.billings,
        },
        notification=notification,
    ), 200


@user_bp.get("/deleted")
def list_deleted_users():
    rows = DeletedUser.query.order_by(DeletedUser.deleted_at.desc(), DeletedUser.id.desc()).all()
    return jsonify(
        deleted_users_count=len(rows),
        deleted_bookings_count=sum(len(r.billings or []) for r in rows),
        deleted_users=[deleted_user_to_dict(r) for r in rows],
    ), 200
