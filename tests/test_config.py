from app.config import (
    Config,
    ConfigApp,
    ConfigGateway,
    ConfigSimTax,
    ConfigStats,
    ConfigUvicorn,
    LogLevel,
)


def get_test_config() -> Config:
    return Config(
        app=ConfigApp(
            loglevel=LogLevel.error,
        ),
        uvicorn=ConfigUvicorn(
            swagger_enabled=False,
            docs_url="/docs",
            redoc_url="/redoc",
            host="0.0.0.0",
            port=8503,
            reload=True,
            use_ssl=False,
            ssl_base_dir=None,
            ssl_cert_file=None,
            ssl_key_file=None,
        ),
        stats=ConfigStats(
            enabled=True, host=None, port=None, module_name="simtax"
        ),
        gateway=ConfigGateway(
            backend="memory",
            base_url=None,
            authentication="off",
        ),
        sim_tax=ConfigSimTax(
            source_ref="https://example.com/source/pinkapi.source.json",
            assessment_schema_ref="https://example.com/schemas/aanslagbiljet.schema.json",
            objection_schema_ref="https://example.com/schemas/bezwaaraanvraag.schema.json",
            objection_event_type="simtax.bezwaar.created",
            sync_before_search=True,
            fail_on_sync_error=False,
        ),
    )
