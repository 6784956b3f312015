# debt_planner/api/routes.py
from flask import Blueprint, jsonify, request
from ..utils.config import settings
from ..utils.logging import get_logger
from ..storage import db
from ..services.portfolio import Portfolio, load_portfolio
from ..services.simulator import run_simulation
from ..services.comparator import compare_strategies
from ..domain.errors import BadRequest
from .schemas import SimulationRequest, parse_simulation_request

bp = Blueprint('api', __name__)
log = get_logger(__name__)


def _portfolio_for(req: SimulationRequest) -> Portfolio:
    # explicit debts in the body win over the stored portfolio
    records = req.debts if req.debts is not None else db.get_active_debts()
    portfolio = load_portfolio(records)
    if portfolio.empty:
        raise BadRequest("no debts to simulate", field="debts")
    return portfolio


@bp.get('/health')
def health():
    return jsonify({"status": "ok"})


@bp.get('/debts/portfolio')
def debts_portfolio():
    portfolio = load_portfolio(db.get_active_debts())
    return jsonify(portfolio.to_dict())


@bp.post('/debts/simulate')
def debts_simulate():
    body = request.get_json(force=True, silent=True) or {}
    req = parse_simulation_request(body)
    portfolio = _portfolio_for(req)

    result = run_simulation(
        portfolio.debts,
        req.extra_budget,
        req.strategy,
        req.start_date,
        max_months=settings.SIM_MAX_MONTHS,
        divergence_factor=settings.SIM_DIVERGENCE_FACTOR,
    )
    log.info(
        f"simulate strategy={req.strategy} months={result.months} payable={result.is_payable}",
        extra={"debts": len(portfolio.debts)},
    )
    return jsonify({
        "simulation": result.to_dict(),
        "exclusions": portfolio.exclusions,
        "warnings": portfolio.warnings,
    })


@bp.post('/debts/compare')
def debts_compare():
    body = request.get_json(force=True, silent=True) or {}
    req = parse_simulation_request(body, require_strategy=False)
    portfolio = _portfolio_for(req)

    comparison = compare_strategies(
        portfolio.debts,
        req.extra_budget,
        req.start_date,
        max_months=settings.SIM_MAX_MONTHS,
        divergence_factor=settings.SIM_DIVERGENCE_FACTOR,
    )
    return jsonify({
        "comparison": comparison.to_dict(selected=req.strategy),
        "exclusions": portfolio.exclusions,
        "warnings": portfolio.warnings,
    })
