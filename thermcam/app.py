from flask import Flask, Response, jsonify, render_template


def create_app(settings, streamer):
    # Static assets under /public, page template from templates/
    app = Flask(__name__, static_folder="public", static_url_path="/public")

    @app.route('/')
    def index():
        # Streaming starts with the first page load; later loads reuse the same loops
        streamer.start()
        return render_template('index.html', interval=settings.period_ms, width=settings.width)

    # Latest frame as a data URI, polled by the page
    @app.route('/frame')
    def frame():
        body = streamer.latest().data_uri
        return Response(body, mimetype='text/plain', headers={'Cache-Control': 'no-cache'})

    @app.route('/status')
    def status():
        return jsonify(streamer.status())

    return app
