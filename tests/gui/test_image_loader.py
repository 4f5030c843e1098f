from __future__ import annotations

from ImageProcessing.gui.ui.controllers.image_loader import ImageLoader


def _png_session(make_response, make_session, encode_png, image):
    data = encode_png(image)
    return make_session(make_response([data], content_length=len(data)))


def test_download_emits_progress_and_image(qapp, sync_pool, make_response, make_session, encode_png, rgb_image) -> None:
    loader = ImageLoader(thread_pool=sync_pool, session=_png_session(make_response, make_session, encode_png, rgb_image))
    progress = []
    images = []
    active = []
    loader.progressChanged.connect(progress.append)
    loader.imageLoaded.connect(images.append)
    loader.activeChanged.connect(active.append)

    loader.download_image("https://example.com/a.png")

    assert progress[0] == 0.0 and progress[-1] == 1.0
    assert len(images) == 1
    assert images[0].size == rgb_image.size
    assert active == [True, False]
    assert not loader.is_active()


def test_new_download_cancels_the_previous_one(
    qapp, deferred_pool, make_response, make_session, encode_png, rgb_image
) -> None:
    loader = ImageLoader(thread_pool=deferred_pool, session=_png_session(make_response, make_session, encode_png, rgb_image))
    images = []
    cancelled = []
    loader.imageLoaded.connect(images.append)
    loader.downloadCancelled.connect(lambda: cancelled.append(True))

    loader.download_image("https://example.com/first.png")
    first = loader.active_worker
    loader.download_image("https://example.com/second.png")
    second = loader.active_worker

    assert first is not second
    assert first.is_cancelled()
    assert not second.is_cancelled()

    deferred_pool.run_all()

    # The superseded worker reports a cancellation that belongs to an old generation.
    assert cancelled == []
    assert len(images) == 1
    assert loader.active_worker is None


def test_cancel_stops_the_active_download(qapp, deferred_pool, make_session) -> None:
    loader = ImageLoader(thread_pool=deferred_pool, session=make_session())
    loader.download_image("https://example.com/a.png")

    worker = loader.active_worker
    assert loader.cancel() is True
    assert worker.is_cancelled()
    assert loader.cancel() is False


def test_failures_are_reported(qapp, sync_pool, make_response, make_session) -> None:
    loader = ImageLoader(thread_pool=sync_pool, session=make_session(make_response([], status=500)))
    failures = []
    loader.downloadFailed.connect(failures.append)

    loader.download_image("https://example.com/a.png")

    assert len(failures) == 1
    assert "500" in failures[0]
    assert not loader.is_active()
