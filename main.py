from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import List, Dict, Optional
from io import StringIO
import logging
import time
import uuid

from session import BasicSession
from config import Settings
from errors import BasicError

logger = logging.getLogger(__name__)

settings = Settings.from_env()

app = FastAPI(title="BASIC Interpreter IDE", version="1.0.0")

# --- Modelos de Dados ---
class RunRequest(BaseModel):
    code: str
    inputs: List[str] = []

class RunResponse(BaseModel):
    success: bool
    output: str
    errors: List[str] = []

class LineRequest(BaseModel):
    line: str
    inputs: List[str] = []

class LineResponse(BaseModel):
    output: str
    error: Optional[str] = None
    quit: bool = False

class SessionState(BaseModel):
    lines: List[str]
    variables: Dict[str, int]

# --- Lógica Auxiliar ---

sessions: Dict[str, BasicSession] = {}
last_used: Dict[str, float] = {}
clock = time.monotonic

def new_session() -> BasicSession:
    return BasicSession(
        input_stream=[], output=StringIO(),
        input_prompt=settings.input_prompt, max_steps=settings.max_steps,
    )

def bind_io(session: BasicSession, inputs: List[str]) -> StringIO:
    """Cada requisição traz suas próprias entradas; a saída é coletada num buffer novo."""
    buffer = StringIO()
    session.interpreter.input_stream = iter(inputs)
    session.interpreter.output = buffer
    return buffer

def drop_session(session_id: str):
    sessions.pop(session_id, None)
    last_used.pop(session_id, None)

def expire_sessions():
    """Remove sessões ociosas há mais de settings.session_ttl segundos."""
    now = clock()
    for session_id, used in list(last_used.items()):
        if now - used > settings.session_ttl:
            logger.info("Sessão %s expirada", session_id)
            drop_session(session_id)

def get_session(session_id: str) -> BasicSession:
    expire_sessions()
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Sessão {session_id} não encontrada")
    last_used[session_id] = clock()
    return session

# --- Endpoints da API ---
@app.post("/api/run", response_model=RunResponse)
async def run_code(request: RunRequest):
    """Carrega o programa linha a linha numa sessão nova e executa RUN."""
    session = new_session()
    buffer = bind_io(session, request.inputs)
    errors = []

    for number, line in enumerate(request.code.splitlines(), start=1):
        try:
            session.process_line(line)
        except BasicError as e:
            errors.append(f"Linha {number}: {e.message}")

    try:
        session.process_line("RUN")
    except BasicError as e:
        logger.info("Execução falhou: %s", e.message)
        errors.append(e.message)

    return RunResponse(success=not errors, output=buffer.getvalue(), errors=errors)

@app.post("/api/sessions")
async def create_session():
    expire_sessions()
    while sessions and len(sessions) >= settings.max_sessions:
        # descarta a sessão usada há mais tempo
        oldest = min(last_used, key=last_used.get)
        logger.info("Limite de sessões atingido, descartando %s", oldest)
        drop_session(oldest)

    session_id = uuid.uuid4().hex
    sessions[session_id] = new_session()
    last_used[session_id] = clock()
    logger.info("Sessão %s criada", session_id)
    return {"session_id": session_id}

@app.post("/api/sessions/{session_id}/lines", response_model=LineResponse)
async def send_line(session_id: str, request: LineRequest):
    session = get_session(session_id)
    buffer = bind_io(session, request.inputs)
    try:
        keep_going = session.process_line(request.line)
    except BasicError as e:
        return LineResponse(output=buffer.getvalue(), error=e.message)

    if not keep_going:
        drop_session(session_id)
        logger.info("Sessão %s encerrada por QUIT", session_id)
    return LineResponse(output=buffer.getvalue(), quit=not keep_going)

@app.get("/api/sessions/{session_id}", response_model=SessionState)
async def read_session(session_id: str):
    session = get_session(session_id)
    program = session.program
    return SessionState(
        lines=[program.get_source_line(n) for n in program.line_numbers()],
        variables=session.state.snapshot(),
    )

@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    get_session(session_id)
    drop_session(session_id)
    return {"deleted": session_id}

@app.get("/api/examples")
async def get_examples():
    return {
        "sum": {"name": "Soma", "code": "10 REM Soma de dois numeros\n20 INPUT A\n30 INPUT B\n40 LET C = A + B\n50 PRINT C\n60 END"},
        "comparison": {"name": "Maior de dois", "code": "10 REM Compara qual numero e maior\n20 INPUT A\n30 INPUT B\n40 IF A > B THEN 70\n50 PRINT B\n60 GOTO 80\n70 PRINT A\n80 END"},
        "countdown": {"name": "Contagem regressiva", "code": "10 LET N = 5\n20 PRINT N\n30 LET N = N - 1\n40 IF N > 0 THEN 20\n50 END"},
    }
