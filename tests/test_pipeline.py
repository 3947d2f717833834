from __future__ import annotations

import logging
import threading
import time

import numpy as np
import pytest

from SpectroCamTool import (CalibrationFitter, CalibrationModelFactory, CalibrationPoint,
                            CalibrationSession, ExtractorConfig, FitCancelled, Frame,
                            FrameExtractor, FrameSlot, GratingModel, InsufficientPoints, LinearModel,
                            ReferenceStore, SessionSnapshot, SpectrographBuilder,
                            SpectrographConfig, SpectrometerConfig,
                            SpectrometerPipeline, Tracer, TracerConfig,
                            camera_advisories, configure_logging)
from SpectroCamTool.CalibrationSetupConfig import GratingSetupConfig, PolynomialSetupConfig


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def session(linear_model):
    return CalibrationSession(LinearModel(parameters=(1.0, 0.0)), model=linear_model,
                              frame_width=100)


@pytest.fixture
def pipeline(session):
    return SpectrometerPipeline(session,
                                extractor=FrameExtractor(ExtractorConfig(expected_width=100)))


class BlockingFitter(CalibrationFitter):
    """Fitter that runs until its cancel event is set."""

    def __init__(self):
        super().__init__()
        self.started = threading.Event()

    def fit(self, points, initial_guess, frame_width=None, cancel_event=None):
        self.started.set()
        cancel_event.wait(5.0)
        raise FitCancelled("cancelled")


### FRAME SLOT ###

def test_slot_keeps_latest_frame(frame_factory):
    slot = FrameSlot()
    frames = [frame_factory() for _ in range(3)]
    for frame in frames:
        slot.put(frame)

    assert slot.get(timeout=0.01) is frames[-1]
    assert slot.dropped == 2
    assert slot.get(timeout=0.01) is None


### PIPELINE ###

def test_malformed_frame_keeps_previous_spectrum(pipeline, frame_factory):
    good = pipeline.process_frame(frame_factory())
    assert good is not None

    result = pipeline.process_frame(frame_factory(width=80))

    assert result is None
    assert pipeline.latest is good
    assert pipeline.skipped == 1
    assert pipeline.processed == 1


def test_no_model_publishes_nothing(frame_factory):
    pipeline = SpectrometerPipeline(CalibrationSession(LinearModel(parameters=(1.0, 0.0))))
    assert pipeline.process_frame(frame_factory()) is None
    assert pipeline.latest is None


def test_relative_falls_back_to_absolute_without_reference(pipeline, frame_factory):
    pipeline.relative = True
    shown = pipeline.process_frame(frame_factory())
    assert shown.mode == "absolute"

    assert pipeline.take_reference()
    shown = pipeline.process_frame(frame_factory())
    assert shown.mode == "relative"
    np.testing.assert_allclose(shown.intensities[shown.valid], 1.0)
    assert pipeline.latest_absolute.mode == "absolute"


def test_take_reference_needs_a_spectrum(pipeline):
    assert not pipeline.take_reference()
    assert pipeline.references.current() is None


def test_reference_store_accepts_only_absolute(pipeline, frame_factory):
    pipeline.process_frame(frame_factory())
    relative = pipeline.builder.relative(pipeline.latest, pipeline.latest)
    with pytest.raises(ValueError):
        ReferenceStore().capture(relative)


def test_averaging_publishes_every_nth_frame(session, frame_factory):
    builder = SpectrographBuilder(SpectrographConfig(average_frames=3))
    pipeline = SpectrometerPipeline(session, builder=builder)

    results = [pipeline.process_frame(frame_factory()) for _ in range(3)]

    assert results[:2] == [None, None]
    assert results[2] is not None
    assert pipeline.processed == 1


def test_tracer_follows_published_spectra(session, frame_factory):
    tracer = Tracer(TracerConfig(wavelengths=[475.0]))
    pipeline = SpectrometerPipeline(session, tracer=tracer)
    tracer.start_session()

    pipeline.process_frame(frame_factory(band=(0, 40)))
    pipeline.process_frame(frame_factory(band=(0, 40)))

    # Pixel 30 maps to 475 nm and holds the brightest line
    assert len(tracer.series[475.0]) == 2
    assert tracer.current(475.0) == pytest.approx(1.05, rel=0.05)


def test_tracer_uses_frame_acquisition_times(session, frame_factory):
    tracer = Tracer(TracerConfig(wavelengths=[475.0]))
    pipeline = SpectrometerPipeline(session, tracer=tracer)
    tracer.start_session()

    for stamp in (100.0, 105.0, 110.0):
        pipeline.process_frame(Frame(samples=frame_factory().samples, timestamp=stamp))

    assert tracer.series[475.0].timestamps == [0.0, 5.0, 10.0]


def test_worker_thread_processes_submitted_frames(pipeline, frame_factory):
    pipeline.start()
    try:
        assert pipeline.running
        pipeline.submit(frame_factory())
        assert _wait_for(lambda: pipeline.latest is not None)
    finally:
        pipeline.stop(timeout=2.0)
    assert not pipeline.running


### CALIBRATION SESSION ###

def test_requested_fit_publishes_on_completion(two_points):
    session = CalibrationSession(LinearModel(parameters=(1.0, 0.0)), frame_width=100)
    for point in two_points:
        session.add_point(point)

    session.request_fit()

    assert session.wait(5.0)
    assert float(session.model.wavelength(50)) == pytest.approx(550.0, abs=1e-3)
    assert session.last_result.converged


def test_newer_request_supersedes_running_fit(two_points):
    blocking = BlockingFitter()
    session = CalibrationSession(LinearModel(parameters=(1.0, 0.0)), fitter=blocking)
    for point in two_points:
        session.add_point(point)

    session.request_fit()
    assert blocking.started.wait(2.0)
    session.fitter = CalibrationFitter()
    session.request_fit()

    assert session.wait(5.0)
    assert session.model is not None
    assert float(session.model.wavelength(90)) == pytest.approx(700.0, abs=1e-3)


def test_cancelled_fit_publishes_nothing(two_points):
    blocking = BlockingFitter()
    session = CalibrationSession(LinearModel(parameters=(1.0, 0.0)), fitter=blocking)
    for point in two_points:
        session.add_point(point)

    session.request_fit()
    assert blocking.started.wait(2.0)
    session.cancel()

    assert session.wait(5.0)
    assert session.model is None
    assert session.last_error is None


def test_requested_fit_failure_is_recorded(linear_model):
    session = CalibrationSession(LinearModel(parameters=(1.0, 0.0)), model=linear_model)
    session.add_point(CalibrationPoint(pixel=10, wavelength=400))

    session.request_fit()

    assert session.wait(5.0)
    assert session.model is linear_model
    assert isinstance(session.last_error, InsufficientPoints)


def test_point_set_edits(two_points):
    session = CalibrationSession(LinearModel(parameters=(1.0, 0.0)))
    for point in two_points:
        session.add_point(point)
    session.remove_point(two_points[0])
    assert session.points == [two_points[1]]
    session.clear_points()
    assert session.points == []


### SNAPSHOT AND CONFIG ###

def test_snapshot_restores_points_model_and_reference(frame_factory):
    config = SpectrometerConfig.from_dict({
        "setup": {"kind": "linear", "sensor_pixels": 100},
        "extractor": {"band_start": 10, "band_stop": 30},
    })
    pipeline = config.create_pipeline()
    for point in (CalibrationPoint(pixel=10, wavelength=400),
                  CalibrationPoint(pixel=90, wavelength=700)):
        pipeline.calibration.add_point(point)
    pipeline.calibration.fit()
    pipeline.process_frame(frame_factory())
    pipeline.take_reference()

    data = pipeline.snapshot().to_dict()
    restored = config.create_pipeline(SessionSnapshot.from_dict(data))

    assert restored.calibration.points == pipeline.calibration.points
    assert restored.calibration.model.parameters == pipeline.calibration.model.parameters
    reference = restored.references.current()
    np.testing.assert_allclose(reference.intensities,
                               pipeline.references.current().intensities)


def test_snapshot_without_reference(session):
    snapshot = SpectrometerPipeline(session).snapshot(keep_reference=False)
    assert snapshot.reference is None
    assert snapshot.restore_reference() is None
    assert isinstance(snapshot.restore_model(), LinearModel)


def test_config_selects_setup_by_kind():
    grating = SpectrometerConfig.from_dict({"setup": {"kind": "grating", "sensor_pixels": 640}})
    poly = SpectrometerConfig.from_dict({"setup": {"kind": "polynomial", "sensor_pixels": 640},
                                         "tracer": {"wavelengths": [550.0]}})

    assert isinstance(grating.setup, GratingSetupConfig)
    assert isinstance(grating.create_session().initial_guess, GratingModel)
    assert isinstance(poly.setup, PolynomialSetupConfig)
    assert poly.create_pipeline().tracer.wavelengths == [550.0]


def test_config_pipeline_skips_frames_of_other_width(frame_factory):
    config = SpectrometerConfig.from_dict({"setup": {"kind": "grating", "sensor_pixels": 640}})
    guess = CalibrationModelFactory.create(config.setup)
    pipeline = config.create_pipeline(SessionSnapshot.capture([], guess, guess))

    assert pipeline.process_frame(frame_factory(width=640)) is not None
    assert pipeline.process_frame(frame_factory(width=480)) is None
    assert pipeline.skipped == 1
    assert pipeline.processed == 1
    assert pipeline.extractor.config.expected_width == 640
    assert config.extractor.expected_width is None


def test_config_keeps_explicit_expected_width():
    config = SpectrometerConfig.from_dict({"setup": {"kind": "linear", "sensor_pixels": 100},
                                           "extractor": {"expected_width": 90}})
    assert config.create_pipeline().extractor.config.expected_width == 90


def test_config_rejects_unknown_setup_kind():
    with pytest.raises(ValueError):
        SpectrometerConfig.from_dict({"setup": {"kind": "prism", "sensor_pixels": 640}})


### AMBIENT ###

def test_camera_advisories_warn_per_control(caplog):
    with caplog.at_level(logging.WARNING):
        messages = camera_advisories(auto_exposure=True, auto_white_balance=True)
    assert len(messages) == 2
    assert "exposure" in caplog.text
    assert camera_advisories() == []


def test_configure_logging_writes_file(tmp_path):
    logger = configure_logging(level=logging.WARNING, log_dir=str(tmp_path / "logs"))
    try:
        assert len(logger.handlers) == 2
        logging.getLogger("SpectroCamTool.test").info("hello")
        for handler in logger.handlers:
            handler.flush()
        files = list((tmp_path / "logs").glob("*.log"))
        assert len(files) == 1
        assert "hello" in files[0].read_text()
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
