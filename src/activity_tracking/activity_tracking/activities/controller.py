from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..catalog.model import Resource
from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..common.validators import optional_notes, optional_positive_int, require_clock, require_positive_int
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_SLOT_MINUTES, MAX_NOTES_LENGTH
from ..core.enums import ShiftState
from ..core.exceptions import NotFoundError, OverlapError, ResourceLockedError, ValidationError
from ..scheduling.model import Activity, Interval
from ..scheduling.time_grid import split_minutes, to_clock
from .model import ActivityChanges, NewActivity, SavedActivity
from .repository import ActivityFilters

LOGGER = logging.getLogger("activity_tracking.api")


def activity_json(a: Activity) -> dict:
    return {
        "id": a.activity_id,
        "obraId": a.work_id,
        "recursoId": a.resource_id,
        "tipoActividadId": a.activity_type_id,
        "fechaInicio": format_iso_date(a.work_date),
        "horaInicio": a.start_time,
        "fechaFin": format_iso_date(a.end_date) if a.end_date else None,
        "horaFin": a.end_time,
        "observaciones": a.notes,
        "jornada": a.state.value,
        "duracionHoras": a.duration_hours,
    }


def interval_json(work_date, interval: Interval) -> dict:
    out: dict[str, Any] = {"horaInicio": to_clock(interval.start), "fechaFin": None, "horaFin": None}
    if interval.end is not None:
        end_date, end_time = split_minutes(work_date, interval.end)
        out["fechaFin"] = format_iso_date(end_date)
        out["horaFin"] = end_time
    return out


def resource_json(r: Resource) -> dict:
    return {
        "id": r.resource_id,
        "codigo": r.code,
        "nombre": r.name,
        "tipo": r.resource_type.value,
        "agrCoste": r.cost_group,
        "displayName": r.display_name,
    }


def saved_json(saved: SavedActivity) -> dict:
    return {
        "actividad": activity_json(saved.activity),
        "ajustada": saved.adjusted,
        "solicitada": interval_json(saved.activity.work_date, saved.requested),
        "conflictos": [activity_json(c) for c in saved.conflicts],
    }


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("El cuerpo de la petición debe ser un objeto JSON")
    return data


def _current_user_id() -> Optional[int]:
    user_id = session.get("user_id")
    return int(user_id) if user_id else None


def _optional_date(value: Any):
    return parse_iso_date(value) if value else None


def _optional_clock(value: Any, field_name: str) -> Optional[str]:
    return require_clock(value, field_name) if value else None


def parse_new_activity(data: dict, *, require_refs: bool = True) -> NewActivity:
    """Body of a create request; validate requests may omit obraId/tipoActividadId."""
    ref = require_positive_int if require_refs else optional_positive_int
    return NewActivity(
        work_id=ref(data.get("obraId"), "obraId"),
        resource_id=require_positive_int(data.get("recursoId"), "recursoId"),
        activity_type_id=ref(data.get("tipoActividadId"), "tipoActividadId"),
        work_date=parse_iso_date(data.get("fechaInicio")),
        start_time=require_clock(data.get("horaInicio"), "horaInicio"),
        end_date=_optional_date(data.get("fechaFin")),
        end_time=_optional_clock(data.get("horaFin"), "horaFin"),
        notes=optional_notes(data.get("observaciones"), MAX_NOTES_LENGTH),
        created_by=_current_user_id(),
    )


def parse_changes(data: dict) -> ActivityChanges:
    return ActivityChanges(
        work_id=optional_positive_int(data.get("obraId"), "obraId"),
        resource_id=optional_positive_int(data.get("recursoId"), "recursoId"),
        activity_type_id=optional_positive_int(data.get("tipoActividadId"), "tipoActividadId"),
        work_date=_optional_date(data.get("fechaInicio")),
        start_time=_optional_clock(data.get("horaInicio"), "horaInicio"),
        end_date=_optional_date(data.get("fechaFin")),
        end_time=_optional_clock(data.get("horaFin"), "horaFin"),
        notes=optional_notes(data.get("observaciones"), MAX_NOTES_LENGTH),
        modified_by=_current_user_id(),
    )


def parse_filters(args) -> ActivityFilters:
    state = args.get("jornada") or None
    if state is not None:
        try:
            state = ShiftState(state)
        except ValueError:
            raise ValidationError("jornada debe ser 'abierta' o 'cerrada'")
    return ActivityFilters(
        work_id=optional_positive_int(args.get("obraId"), "obraId"),
        resource_id=optional_positive_int(args.get("recursoId"), "recursoId"),
        activity_type_id=optional_positive_int(args.get("tipoActividadId"), "tipoActividadId"),
        date_from=_optional_date(args.get("fechaDesde")),
        date_to=_optional_date(args.get("fechaHasta")),
        state=state,
        created_by=optional_positive_int(args.get("usuarioId"), "usuarioId"),
    )


def register(app: Flask, container: Container) -> None:
    service = container.activity_service

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except OverlapError as e:
                return jsonify({
                    "message": str(e),
                    "conflictingActivities": [activity_json(c) for c in e.conflicts],
                }), 409
            except ValidationError as e:
                return jsonify({"message": str(e)}), 400
            except NotFoundError as e:
                return jsonify({"message": str(e)}), 404
            except ResourceLockedError as e:
                return jsonify({"message": str(e)}), 409
            except Exception:
                LOGGER.exception("Unhandled error in %s", request.path)
                return jsonify({"message": "Error interno del servidor"}), 500

        return wrapper

    @app.route("/api/actividades", methods=["GET"], endpoint="api_actividades_list")
    @json_errors
    def list_activities():
        page = service.search(
            parse_filters(request.args),
            page=request.args.get("page", 1, type=int),
            limit=request.args.get("limit", DEFAULT_PAGE_SIZE, type=int),
        )
        return jsonify({
            "actividades": [activity_json(a) for a in page.items],
            "total": page.total,
            "page": page.page,
            "totalPages": page.total_pages,
        })

    @app.route("/api/actividades", methods=["POST"], endpoint="api_actividades_create")
    @json_errors
    def create_activity():
        saved = service.create(parse_new_activity(_payload()))
        body = saved_json(saved)
        body["message"] = "Actividad creada exitosamente"
        return jsonify(body), 201

    @app.route("/api/actividades/recursos", methods=["GET"], endpoint="api_actividades_recursos")
    @json_errors
    def accessible_resources():
        return jsonify({"recursos": [resource_json(r) for r in service.list_active_resources()]})

    @app.route("/api/actividades/abiertas", methods=["GET"], endpoint="api_actividades_abiertas")
    @json_errors
    def open_activities():
        resource_id = optional_positive_int(request.args.get("recursoId"), "recursoId")
        return jsonify({"actividades": [activity_json(a) for a in service.list_open(resource_id)]})

    @app.route("/api/actividades/statistics", methods=["GET"], endpoint="api_actividades_statistics")
    @json_errors
    def activity_statistics():
        stats = service.statistics(
            date_from=_optional_date(request.args.get("fechaDesde")),
            date_to=_optional_date(request.args.get("fechaHasta")),
        )
        return jsonify({
            "totalActividades": stats.total,
            "actividadesAbiertas": stats.open,
            "actividadesCerradas": stats.closed,
            "totalHoras": stats.total_hours,
        })

    @app.route("/api/actividades/validate", methods=["POST"], endpoint="api_actividades_validate")
    @json_errors
    def validate_activity():
        data = _payload()
        outcome = service.validate(
            parse_new_activity(data, require_refs=False),
            exclude_id=optional_positive_int(data.get("excludeId"), "excludeId"),
        )
        work_date = parse_iso_date(data.get("fechaInicio"))
        return jsonify({
            "hasOverlap": outcome.has_overlap,
            "conflictingActivities": [activity_json(c) for c in outcome.conflicts],
            "message": outcome.message,
            "propuesta": interval_json(work_date, outcome.proposal) if outcome.proposal is not None else None,
        })

    @app.route("/api/actividades/suggest-slots", methods=["GET"], endpoint="api_actividades_suggest")
    @json_errors
    def suggest_slots():
        work_date = parse_iso_date(request.args.get("fecha"))
        slots = service.suggest_slots(
            resource_id=require_positive_int(request.args.get("recursoId"), "recursoId"),
            work_date=work_date,
            duration_minutes=require_positive_int(
                request.args.get("duracion", DEFAULT_SLOT_MINUTES), "duracion"
            ),
        )
        return jsonify({
            "suggestions": [
                {"start": to_clock(s.start), "end": interval_json(work_date, s)["horaFin"]} for s in slots
            ]
        })

    @app.route("/api/actividades/by-resource-date", methods=["GET"], endpoint="api_actividades_by_resource_date")
    @json_errors
    def activities_by_resource_date():
        activities = service.list_for_resource_date(
            require_positive_int(request.args.get("recursoId"), "recursoId"),
            parse_iso_date(request.args.get("fecha")),
        )
        return jsonify({"actividades": [activity_json(a) for a in activities]})

    @app.route("/api/actividades/<int:activity_id>", methods=["GET"], endpoint="api_actividades_get")
    @json_errors
    def get_activity(activity_id: int):
        return jsonify({"actividad": activity_json(service.get(activity_id))})

    @app.route("/api/actividades/<int:activity_id>", methods=["PUT"], endpoint="api_actividades_update")
    @json_errors
    def update_activity(activity_id: int):
        saved = service.update(activity_id, parse_changes(_payload()))
        body = saved_json(saved)
        body["message"] = "Actividad actualizada exitosamente"
        return jsonify(body)

    @app.route("/api/actividades/<int:activity_id>", methods=["DELETE"], endpoint="api_actividades_delete")
    @json_errors
    def delete_activity(activity_id: int):
        service.delete(activity_id)
        return jsonify({"message": "Actividad eliminada exitosamente"})

    @app.route("/api/actividades/<int:activity_id>/cerrar", methods=["PUT"], endpoint="api_actividades_close")
    @json_errors
    def close_activity(activity_id: int):
        data = _payload()
        if not data.get("fechaFin") or not data.get("horaFin"):
            raise ValidationError("Fecha y hora de fin son obligatorias")
        saved = service.close(
            activity_id,
            end_date=parse_iso_date(data.get("fechaFin")),
            end_time=require_clock(data.get("horaFin"), "horaFin"),
            user_id=_current_user_id(),
        )
        body = saved_json(saved)
        body["message"] = "Jornada cerrada exitosamente"
        return jsonify(body)

    @app.route("/api/actividades/<int:activity_id>/calculate-end", methods=["POST"], endpoint="api_actividades_calculate_end")
    @json_errors
    def calculate_end(activity_id: int):
        proposal = service.calculate_end(activity_id)
        if proposal is None:
            return jsonify({"calculatedEndTime": None})
        end_date, end_time = proposal
        return jsonify({"calculatedEndTime": {"fecha": format_iso_date(end_date), "hora": end_time}})
