from fastapi import APIRouter, Depends, HTTPException, Response
from app.api.v1.schemas import (
    LoadSessionRequestSchema, SelectRequestSchema, SegmentResultsRequestSchema,
    SessionResponseSchema, VisibleGroupSchema, OptionSchema, SegmentSchema,
    SelectionSchema, FilterEntrySchema, ValidationSchema, SchemaReportSchema,
    SegmentQuerySchema, BookingRequestSchema,
)
from app.wiring.dependencies import get_session_store
from app.application.ports.session_store import SelectionSessionStorePort
from app.application.use_cases.attribute_session import AttributeSession
from app.application.exceptions import SessionNotFoundError

router = APIRouter()


def _require_session(store: SelectionSessionStorePort, session_id: str) -> AttributeSession:
    session = store.get(session_id)
    if session is None:
        raise SessionNotFoundError(session_id)
    return session


def get_session_or_404(
    session_id: str,
    store: SelectionSessionStorePort = Depends(get_session_store),
) -> AttributeSession:
    try:
        return _require_session(store, session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


def _session_response(session: AttributeSession, include_report: bool = False, reset=()) -> SessionResponseSchema:
    view = session.view()
    state = session.state()
    validation = session.validate()
    schema = session.schema
    return SessionResponseSchema(
        session_id=session.session_id,
        groups=[
            VisibleGroupSchema(
                name=g.name,
                kind=g.kind.value if g.kind else None,
                parent=g.parent,
                level=g.level,
                required=g.required,
                selected_id=g.selected_id,
                options=[OptionSchema(id=o.id, name=o.name, value=o.value, weight=o.weight) for o in g.options],
            )
            for g in view.groups
        ],
        segments=[SegmentSchema(id=s.id, segment_name=s.segment_name) for s in view.segments],
        selections={
            name: SelectionSchema(id=s.id, value=s.value, timestamp=s.timestamp)
            for name, s in state.selections.items()
        },
        selected_segment_id=state.selected_segment_id,
        filters=[FilterEntrySchema(**f.to_payload()) for f in state.filter_list],
        validation=ValidationSchema(**validation.to_payload()),
        ready_for_booking=session.is_ready_for_booking(),
        report=(
            SchemaReportSchema(
                is_valid=schema.is_valid,
                attribute_count=schema.attribute_count,
                supported_count=schema.supported_count,
                unsupported_count=schema.unsupported_count,
                errors=list(schema.errors),
                warnings=list(schema.warnings),
            )
            if include_report else None
        ),
        reset=list(reset),
    )


@router.post("", response_model=SessionResponseSchema)
def load_session(
    req: LoadSessionRequestSchema,
    store: SelectionSessionStorePort = Depends(get_session_store),
):
    session = store.create(req.session_id)
    session.load(req.service, service_id=req.service_id)
    return _session_response(session, include_report=True)


@router.get("/{session_id}", response_model=SessionResponseSchema)
def get_session(session: AttributeSession = Depends(get_session_or_404)):
    return _session_response(session, include_report=True)


@router.delete("/{session_id}", status_code=204)
def discard_session(session_id: str, store: SelectionSessionStorePort = Depends(get_session_store)):
    if not store.discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=204)


@router.post("/{session_id}/selections", response_model=SessionResponseSchema)
def select_option(
    req: SelectRequestSchema,
    session: AttributeSession = Depends(get_session_or_404),
):
    outcome = session.select(req.attribute_name, req.option_id or "", req.value, req.data)
    return _session_response(session, reset=outcome.reset)


@router.delete("/{session_id}/selections", response_model=SessionResponseSchema)
def clear_selections(session: AttributeSession = Depends(get_session_or_404)):
    session.clear_all()
    return _session_response(session)


@router.get("/{session_id}/filters", response_model=list[FilterEntrySchema])
def get_filters(session: AttributeSession = Depends(get_session_or_404)):
    return [FilterEntrySchema(**f.to_payload()) for f in session.filters()]


@router.get("/{session_id}/segment-query", response_model=SegmentQuerySchema)
def get_segment_query(
    segment_id: str | None = None,
    session: AttributeSession = Depends(get_session_or_404),
):
    return SegmentQuerySchema(**session.segment_query(segment_id=segment_id).to_payload())


@router.post("/{session_id}/segments", response_model=SessionResponseSchema)
def receive_segments(
    req: SegmentResultsRequestSchema,
    session: AttributeSession = Depends(get_session_or_404),
):
    session.receive_segments(req.segments)
    return _session_response(session)


@router.get("/{session_id}/booking", response_model=BookingRequestSchema)
def get_booking_request(session: AttributeSession = Depends(get_session_or_404)):
    booking = session.booking_request()
    if booking is None:
        raise HTTPException(status_code=422, detail=session.validate().to_payload())
    return BookingRequestSchema(**booking.to_payload())
