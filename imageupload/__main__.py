from imageupload.main import run

run()
